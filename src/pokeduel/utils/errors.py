"""Structured error types for the battle game.

This module provides structured exceptions with recovery actions
for the failure modes of the fetch-and-render pipeline.
"""

from enum import Enum


class RecoveryAction(Enum):
    """Recovery actions for error handling."""

    ABORT = "abort"
    DEGRADE = "degrade"
    REJECT = "reject"


class PokeDuelError(Exception):
    """Base exception for battle game errors."""

    def __init__(
        self, message: str, recovery_action: RecoveryAction = RecoveryAction.ABORT
    ):
        """Initialize battle game error.

        Args:
            message: Error message
            recovery_action: Suggested recovery action
        """
        super().__init__(message)
        self.recovery_action = recovery_action


class FetchError(PokeDuelError):
    """Error raised when a creature resource cannot be fetched.

    Network failures, non-success HTTP statuses and malformed bodies
    all collapse into this error.
    """

    def __init__(
        self,
        resource: str,
        status_code: int | None = None,
        reason: str | None = None,
    ):
        """Initialize fetch error.

        Args:
            resource: Resource identifier or URL that failed
            status_code: HTTP status code, if a response was received
            reason: Underlying failure description
        """
        self.resource = resource
        self.status_code = status_code
        self.reason = reason

        message = f"Failed to fetch {resource}"
        if status_code is not None:
            message += f": HTTP {status_code}"
        if reason:
            message += f" ({reason})"

        super().__init__(message, RecoveryAction.ABORT)


class SelectionInProgressError(PokeDuelError):
    """Error raised when a new pair is requested while one is being fetched."""

    def __init__(self) -> None:
        super().__init__("A new pair is already being selected", RecoveryAction.REJECT)


class BattleInProgressError(PokeDuelError):
    """Error raised when a flow is started while a battle is running."""

    def __init__(self) -> None:
        super().__init__("A battle is already in progress", RecoveryAction.REJECT)
