"""
Gemini adapters - chat, video and image clients over google-genai

Usage:
    from adgen.services.infrastructure.llm.gemini import GeminiClientProvider, GeminiChatClient
"""

from .client import (
    GeminiClientProvider,
    classify_error,
    is_auth_error,
    AUTH_ERROR_MARKER,
)
from .chat import GeminiChatClient
from .media import GeminiVideoJobClient, GeminiImageJobClient

__all__ = [
    "GeminiClientProvider",
    "classify_error",
    "is_auth_error",
    "AUTH_ERROR_MARKER",
    "GeminiChatClient",
    "GeminiVideoJobClient",
    "GeminiImageJobClient",
]
