# Area: Shared
"""
escrims.errors — Custom exception classes
==========================================

Defines the exception hierarchy raised by the scrim lifecycle, the
organizer session and the matchmaking registry.

Every error is raised at the point of detection, before the aggregate
is mutated, so a failed operation always leaves the scrim unchanged.
Each exception stores its context for structured logging.
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from .error_formatter import format_error_block


class ScrimError(Exception):
    """Base exception for all eScrims package errors."""

    error_type = "SCRIM_ERROR"

    def __init__(
        self,
        message: str,
        scrim_id: Optional[str] = None,
        state: Optional[str] = None,
        **context: Any,
    ):
        self.message = message
        self.scrim_id = scrim_id
        self.state = state
        self.context: Dict[str, Any] = context
        super().__init__(message)

    def format_error_log(self) -> str:
        return format_error_block(
            error_type=self.error_type,
            message=self.message,
            scrim_id=self.scrim_id,
            state=self.state,
            context=self.context,
        )


class InvalidTransitionError(ScrimError):
    """Raised when an operation is not legal in the scrim's current state."""

    error_type = "INVALID_TRANSITION"

    def __init__(self, operation: str, state: str, reason: str,
                 scrim_id: Optional[str] = None):
        self.operation = operation
        super().__init__(
            f"Cannot {operation} while {state}: {reason}",
            scrim_id=scrim_id,
            state=state,
            operation=operation,
        )


class ValidationError(ScrimError):
    """Raised when input fails a domain rule."""

    error_type = "VALIDATION"


class DuplicateApplicationError(ValidationError):
    """Raised when a user applies twice to the same scrim."""

    error_type = "DUPLICATE_APPLICATION"

    def __init__(self, user_id: str, scrim_id: Optional[str] = None,
                 state: Optional[str] = None):
        self.user_id = user_id
        super().__init__(
            f"User '{user_id}' already applied to this scrim",
            scrim_id=scrim_id,
            state=state,
            user_id=user_id,
        )


class NotFoundError(ScrimError):
    """Raised when a referenced user, role, slot or record does not exist."""

    error_type = "NOT_FOUND"


class PreconditionError(ScrimError):
    """Raised when an organizer action cannot run against the current roster."""

    error_type = "PRECONDITION_FAILED"


class SessionLockedError(ScrimError):
    """Raised when an organizer session is mutated after confirmation."""

    error_type = "SESSION_LOCKED"


class NothingToUndoError(ScrimError):
    """Raised when undo is requested with an empty history."""

    error_type = "NOTHING_TO_UNDO"
