"""
Generation package - the single-job orchestrator and its collaborator ports
"""

from .ports import AuthGate, MediaJobClient, ChatClient, JobHandle, PollResult
from .poll_policy import PollPolicy
from .orchestrator import (
    GenerationOrchestrator,
    GenerationSnapshot,
    AUTH_FAILED_MESSAGE,
    GENERIC_FAILURE_MESSAGE,
    NO_RESULT_MESSAGE,
)

__all__ = [
    "AuthGate",
    "MediaJobClient",
    "ChatClient",
    "JobHandle",
    "PollResult",
    "PollPolicy",
    "GenerationOrchestrator",
    "GenerationSnapshot",
    "AUTH_FAILED_MESSAGE",
    "GENERIC_FAILURE_MESSAGE",
    "NO_RESULT_MESSAGE",
]
