# Shared utilities and helpers

from .errors import (
    BattleInProgressError,
    FetchError,
    PokeDuelError,
    RecoveryAction,
    SelectionInProgressError,
)
from .telemetry import (
    async_performance_timer,
    get_logger,
    log_operation,
    record_battle_outcome,
    setup_logging,
)

__all__ = [
    "BattleInProgressError",
    "FetchError",
    "PokeDuelError",
    "RecoveryAction",
    "SelectionInProgressError",
    "async_performance_timer",
    "get_logger",
    "log_operation",
    "record_battle_outcome",
    "setup_logging",
]
