"""Unit tests for the structured error types."""

from pokeduel.utils.errors import (
    BattleInProgressError,
    FetchError,
    PokeDuelError,
    RecoveryAction,
    SelectionInProgressError,
)


class TestPokeDuelError:
    """Test base PokeDuelError class."""

    def test_initialization(self) -> None:
        """Test error initialization with message and recovery action."""
        error = PokeDuelError("Test error", RecoveryAction.DEGRADE)
        assert str(error) == "Test error"
        assert error.recovery_action == RecoveryAction.DEGRADE

    def test_default_recovery_action(self) -> None:
        """Test default recovery action is ABORT."""
        error = PokeDuelError("Test error")
        assert error.recovery_action == RecoveryAction.ABORT


class TestFetchError:
    """Test FetchError class."""

    def test_with_status(self) -> None:
        error = FetchError("https://pokeapi.co/api/v2/pokemon/9999", status_code=404)

        assert error.resource == "https://pokeapi.co/api/v2/pokemon/9999"
        assert error.status_code == 404
        assert error.reason is None
        assert str(error) == (
            "Failed to fetch https://pokeapi.co/api/v2/pokemon/9999: HTTP 404"
        )

    def test_with_reason(self) -> None:
        """Test transport failures carry a reason but no status."""
        error = FetchError("pokemon/1", reason="timed out")

        assert error.status_code is None
        assert str(error) == "Failed to fetch pokemon/1 (timed out)"

    def test_with_status_and_reason(self) -> None:
        error = FetchError("pokemon/1", status_code=200, reason="malformed body")
        assert str(error) == "Failed to fetch pokemon/1: HTTP 200 (malformed body)"

    def test_is_pokeduel_error(self) -> None:
        error = FetchError("pokemon/1")
        assert isinstance(error, PokeDuelError)
        assert error.recovery_action == RecoveryAction.ABORT


class TestInProgressErrors:
    """Test the in-flight guard errors."""

    def test_selection_in_progress(self) -> None:
        error = SelectionInProgressError()
        assert str(error) == "A new pair is already being selected"
        assert error.recovery_action == RecoveryAction.REJECT

    def test_battle_in_progress(self) -> None:
        error = BattleInProgressError()
        assert str(error) == "A battle is already in progress"
        assert error.recovery_action == RecoveryAction.REJECT
