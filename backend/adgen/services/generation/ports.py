"""
Collaborator interfaces for generation and chat

Defines the abstract interfaces the orchestrator and the chat session depend
on. Gemini-backed implementations live in services.infrastructure.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, AsyncIterator, Optional

from adgen.models import Attachment, ErrorKind, GenerationJobConfig, MediaKind


@dataclass(frozen=True)
class JobHandle:
    """Opaque reference to a remote job"""
    id: str
    kind: MediaKind = MediaKind.VIDEO
    operation: Any = None  # Provider object needed to poll again


@dataclass(frozen=True)
class PollResult:
    """Outcome of a single poll.

    `done=False` means keep polling; `handle` may carry a refreshed operation.
    A done result has either `result_uri` or `error_kind`.
    """
    done: bool
    handle: Optional[JobHandle] = None
    result_uri: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None

    @classmethod
    def pending(cls, handle: Optional[JobHandle] = None) -> "PollResult":
        return cls(done=False, handle=handle)

    @classmethod
    def succeeded(cls, result_uri: str) -> "PollResult":
        return cls(done=True, result_uri=result_uri)

    @classmethod
    def failed(cls, message: str, kind: ErrorKind = ErrorKind.POLLING_FAILED) -> "PollResult":
        return cls(done=True, error_kind=kind, error_message=message)


class AuthGate(ABC):
    """Decides whether the user has access to the paid generation models."""

    @abstractmethod
    async def check(self) -> bool:
        """Return True when access is granted."""
        pass

    @abstractmethod
    async def prompt_interactive(self) -> None:
        """Ask the user to select credentials. Best effort; may be a no-op."""
        pass


class MediaJobClient(ABC):
    """Submit/poll interface over a long-running generation service."""

    kind: MediaKind = MediaKind.VIDEO

    @abstractmethod
    async def submit(self, config: GenerationJobConfig) -> JobHandle:
        """Start a job.

        Raises:
            AuthRequiredError: credentials were rejected
            SubmissionFailedError: the request was refused or malformed
        """
        pass

    @abstractmethod
    async def poll(self, handle: JobHandle) -> PollResult:
        """Check a job once.

        Raises:
            TransientPollError: the call failed at the transport level
            AuthRequiredError: credentials were rejected
        """
        pass


class ChatClient(ABC):
    """Streaming chat with a script-writing model."""

    @abstractmethod
    def stream_reply(self, text: str, attachment: Optional[Attachment] = None) -> AsyncIterator[str]:
        """Yield reply text chunks for one user turn."""
        pass
