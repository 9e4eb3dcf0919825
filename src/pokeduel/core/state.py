"""Battle state owned by the controller.

``BattleState`` holds the current pair and the outcome; ``ControlState``
holds the UI flags derived by the flows. Both are plain dataclasses that
are only mutated from the event loop.
"""

from dataclasses import dataclass, field
from typing import Literal

from pokeduel.schemas.messages import GalleryEntry
from pokeduel.schemas.types import Creature

BATTLE_LABEL = "Battle"


@dataclass(frozen=True)
class BattleOutcome:
    """Result of comparing the pair's attack stats."""

    kind: Literal["tie", "win"]
    message: str
    winner: Creature | None = None

    @property
    def winner_head(self) -> str:
        return f"{self.winner.name}!" if self.winner else ""

    @property
    def winner_type(self) -> str:
        return f"Type: {self.winner.type_name}" if self.winner else ""


@dataclass
class BattleState:
    """The pair currently facing each other, or no pair at all.

    Both slots are always populated or cleared together.
    """

    first: Creature | None = None
    second: Creature | None = None
    outcome: BattleOutcome | None = None
    generation: int = 0

    @property
    def has_pair(self) -> bool:
        return self.first is not None and self.second is not None

    def replace_pair(self, first: Creature, second: Creature) -> None:
        """Swap in a fully fetched pair and drop the previous outcome."""
        self.first = first
        self.second = second
        self.outcome = None
        self.generation += 1


@dataclass
class ControlState:
    """UI flags derived by the selection and resolution flows."""

    battle_enabled: bool = False
    battle_label: str = BATTLE_LABEL
    selecting: bool = False
    battling: bool = False
    error_message: str = ""
    show_outcome: bool = False
    gallery: list[GalleryEntry] = field(default_factory=list)
    # Bumped whenever the result display is cleared or replaced
    result_epoch: int = 0

    @property
    def gallery_visible(self) -> bool:
        return bool(self.gallery)

    def clear_result(self) -> None:
        """Reset the result display before a new pair is chosen."""
        self.error_message = ""
        self.show_outcome = False
        self.gallery = []
        self.result_epoch += 1
