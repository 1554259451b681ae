"""
Domain records and pydantic API schemas
"""

from .status import GenerationStatus, ErrorKind, MediaKind, can_transition
from .script import ScriptData, ScriptResponse, DEFAULT_TITLE, DEFAULT_VISUAL_STYLE
from .conversation import (
    Role,
    AttachmentKind,
    Attachment,
    Message,
    AttachmentPayload,
    ChatRequest,
    AttachmentSummary,
    MessageResponse,
    ConversationResponse,
)
from .generation import (
    GenerationJobConfig,
    VideoGenerationRequest,
    ImageGenerationRequest,
    GenerationStatusResponse,
)

__all__ = [
    "GenerationStatus",
    "ErrorKind",
    "MediaKind",
    "can_transition",
    "ScriptData",
    "ScriptResponse",
    "DEFAULT_TITLE",
    "DEFAULT_VISUAL_STYLE",
    "Role",
    "AttachmentKind",
    "Attachment",
    "Message",
    "AttachmentPayload",
    "ChatRequest",
    "AttachmentSummary",
    "MessageResponse",
    "ConversationResponse",
    "GenerationJobConfig",
    "VideoGenerationRequest",
    "ImageGenerationRequest",
    "GenerationStatusResponse",
]
