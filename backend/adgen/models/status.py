"""
Generation status constants and enumerations.

Centralized status definitions shared by the orchestrator, the API schemas and
the UI. Values match the strings the front-end switches on.
"""

from enum import Enum


class GenerationStatus(Enum):
    """Enumeration of all generation states."""

    IDLE = "idle"
    CHECKING_AUTH = "checking-auth"
    GENERATING = "generating"
    POLLING = "polling"
    COMPLETED = "completed"
    ERROR = "error"

    def is_terminal(self) -> bool:
        """Check if this status ends a job (no further progress)."""
        return self in (GenerationStatus.COMPLETED, GenerationStatus.ERROR)

    def is_busy(self) -> bool:
        """Check if a job is in flight and new requests must be refused."""
        return self in BUSY_STATUSES


BUSY_STATUSES = frozenset({
    GenerationStatus.CHECKING_AUTH,
    GenerationStatus.GENERATING,
    GenerationStatus.POLLING,
})


# Reset (-> IDLE) is always legal and handled separately.
ALLOWED_TRANSITIONS = {
    GenerationStatus.IDLE: {GenerationStatus.CHECKING_AUTH},
    GenerationStatus.CHECKING_AUTH: {
        GenerationStatus.IDLE,
        GenerationStatus.GENERATING,
        GenerationStatus.ERROR,
    },
    GenerationStatus.GENERATING: {GenerationStatus.POLLING, GenerationStatus.ERROR},
    GenerationStatus.POLLING: {GenerationStatus.COMPLETED, GenerationStatus.ERROR},
    GenerationStatus.COMPLETED: {GenerationStatus.CHECKING_AUTH},
    GenerationStatus.ERROR: {GenerationStatus.CHECKING_AUTH},
}


def can_transition(current: GenerationStatus, target: GenerationStatus) -> bool:
    """Return True if `current -> target` is an edge of the state machine."""
    if target is GenerationStatus.IDLE:
        return True
    return target in ALLOWED_TRANSITIONS.get(current, set())


class ErrorKind(str, Enum):
    """Classification attached to the `error` state."""

    AUTH_REQUIRED = "auth_required"
    SUBMISSION_FAILED = "submission_failed"
    POLLING_FAILED = "polling_failed"
    TRANSIENT_POLL_ERROR = "transient_poll_error"
    TIMEOUT = "timeout"


class MediaKind(str, Enum):
    """Kind of media a generation job produces."""

    VIDEO = "video"
    IMAGE = "image"


__all__ = [
    "GenerationStatus",
    "BUSY_STATUSES",
    "ALLOWED_TRANSITIONS",
    "can_transition",
    "ErrorKind",
    "MediaKind",
]
