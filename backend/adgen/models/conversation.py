"""
Conversation models

Domain records for the chat history plus the request/response schemas of the
chat endpoints.
"""

import base64
import binascii
from dataclasses import dataclass
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, field_validator, model_validator


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class AttachmentKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


@dataclass(frozen=True)
class Attachment:
    """Media carried by a message. `data` is base64 text without a data-URL prefix."""
    kind: AttachmentKind
    mime_type: str
    data: str

    def decode(self) -> bytes:
        return base64.b64decode(self.data)


@dataclass
class Message:
    """One turn of the conversation.

    Only the assistant message currently receiving chunks has `streaming` set;
    its text grows by appending and is frozen once streaming ends.
    """
    id: str
    role: Role
    text: str = ""
    attachment: Optional[Attachment] = None
    streaming: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "role": self.role.value,
            "text": self.text,
            "attachment": {
                "kind": self.attachment.kind.value,
                "mime_type": self.attachment.mime_type,
            } if self.attachment else None,
            "streaming": self.streaming,
        }


class AttachmentPayload(BaseModel):
    """Attachment as uploaded by the client. `kind` follows the mime type when omitted."""
    kind: Optional[Literal["image", "video"]] = None
    mime_type: str
    data: str

    @field_validator("data")
    @classmethod
    def _strip_data_url(cls, value: str) -> str:
        # Browsers hand out `data:image/png;base64,....`; keep the payload only
        if value.startswith("data:") and "," in value:
            value = value.split(",", 1)[1]
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("attachment data must be base64 encoded")
        return value

    @field_validator("mime_type")
    @classmethod
    def _check_mime(cls, value: str) -> str:
        from adgen.config import ALLOWED_ATTACHMENT_MIME_PREFIXES
        value = value.strip().lower()
        if not value.startswith(ALLOWED_ATTACHMENT_MIME_PREFIXES):
            raise ValueError("only image/* and video/* attachments are supported")
        return value

    @model_validator(mode="after")
    def _match_kind_to_mime(self) -> "AttachmentPayload":
        derived = self.mime_type.split("/", 1)[0]
        if self.kind is None:
            self.kind = derived
        elif self.kind != derived:
            raise ValueError(f"attachment kind '{self.kind}' does not match mime type '{self.mime_type}'")
        return self

    def to_attachment(self) -> Attachment:
        return Attachment(
            kind=AttachmentKind(self.kind),
            mime_type=self.mime_type,
            data=self.data,
        )


class ChatRequest(BaseModel):
    """A user turn"""
    text: str = ""
    attachment: Optional[AttachmentPayload] = None


class AttachmentSummary(BaseModel):
    kind: str
    mime_type: str


class MessageResponse(BaseModel):
    id: str
    role: str
    text: str
    attachment: Optional[AttachmentSummary] = None
    streaming: bool = False


class ConversationResponse(BaseModel):
    messages: List[MessageResponse]
