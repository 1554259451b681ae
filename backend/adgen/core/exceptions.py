"""
Core Exceptions
Standardized base exceptions for the application.
"""

from typing import Optional

from adgen.models.status import ErrorKind


class AdGenError(Exception):
    """Base exception for all application errors."""
    pass


class ConversationBusyError(AdGenError):
    """A reply is already streaming into the conversation."""
    pass


class GenerationBusyError(AdGenError):
    """A generation job is already in flight."""
    pass


class InvalidTransitionError(AdGenError):
    """The orchestrator was asked to move between two unconnected states."""
    pass


class GenerationError(AdGenError):
    """Base exception for media generation failures.

    Every subclass carries the `ErrorKind` the orchestrator reports when the
    error ends a job.
    """

    kind: ErrorKind = ErrorKind.SUBMISSION_FAILED

    def __init__(self, message: str = "", kind: Optional[ErrorKind] = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind

    @property
    def message(self) -> str:
        return str(self)


class AuthRequiredError(GenerationError):
    kind = ErrorKind.AUTH_REQUIRED


class SubmissionFailedError(GenerationError):
    kind = ErrorKind.SUBMISSION_FAILED


class PollingFailedError(GenerationError):
    kind = ErrorKind.POLLING_FAILED


class TransientPollError(GenerationError):
    """A single poll call failed at the transport level; safe to retry."""
    kind = ErrorKind.TRANSIENT_POLL_ERROR
