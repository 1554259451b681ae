"""
Core Module - Cross-cutting concerns and shared infrastructure

Organization:
    - logging.py: Structured logging configuration and utilities
    - exceptions.py: Application exception hierarchy
    - runtime.py: Environment parsing helpers

Usage:
    from adgen.core import get_logger, parse_bool_env
"""

from .logging import (
    setup_logging,
    get_logger,
    set_request_id,
    set_job_id,
    clear_context,
    LogTimer,
)

from .exceptions import (
    AdGenError,
    ConversationBusyError,
    GenerationBusyError,
    InvalidTransitionError,
    GenerationError,
    AuthRequiredError,
    SubmissionFailedError,
    PollingFailedError,
    TransientPollError,
)

from .runtime import (
    parse_bool_env,
    env_int,
    env_float,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "set_request_id",
    "set_job_id",
    "clear_context",
    "LogTimer",
    "AdGenError",
    "ConversationBusyError",
    "GenerationBusyError",
    "InvalidTransitionError",
    "GenerationError",
    "AuthRequiredError",
    "SubmissionFailedError",
    "PollingFailedError",
    "TransientPollError",
    "parse_bool_env",
    "env_int",
    "env_float",
]
