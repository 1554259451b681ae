"""
Conversation package - message history, reference selection and the chat session
"""

from .history import Conversation
from .reference import (
    select_reference,
    is_image,
    is_video,
    from_user,
    user_image,
    all_of,
)
from .session import ChatSession, ChatTurn
from .prompts import SYSTEM_INSTRUCTION, GREETING, STREAM_ERROR_REPLY

__all__ = [
    "Conversation",
    "select_reference",
    "is_image",
    "is_video",
    "from_user",
    "user_image",
    "all_of",
    "ChatSession",
    "ChatTurn",
    "SYSTEM_INSTRUCTION",
    "GREETING",
    "STREAM_ERROR_REPLY",
]
