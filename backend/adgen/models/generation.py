"""
Generation models

`GenerationJobConfig` is the immutable description of one generation attempt.
The pydantic classes are the request/response schemas of the generation
endpoints.
"""

from dataclasses import dataclass, replace
from typing import Optional

from pydantic import BaseModel, field_validator

from .conversation import Attachment, AttachmentPayload
from .status import MediaKind


@dataclass(frozen=True)
class GenerationJobConfig:
    """Everything the media client needs for one submission.

    Built fresh for every attempt and never mutated after submission.
    """
    prompt: str
    aspect_ratio: str = "9:16"
    resolution: str = "720p"
    reference: Optional[Attachment] = None
    kind: MediaKind = MediaKind.VIDEO

    def with_reference(self, reference: Optional[Attachment]) -> "GenerationJobConfig":
        return replace(self, reference=reference)

    def describe(self) -> dict:
        """Loggable summary (no attachment payload)."""
        return {
            "kind": self.kind.value,
            "aspect_ratio": self.aspect_ratio,
            "resolution": self.resolution,
            "prompt_chars": len(self.prompt),
            "has_reference": self.reference is not None,
        }


# === Request Models ===

class VideoGenerationRequest(BaseModel):
    """Request to render the latest script (or an explicit prompt) with Veo"""
    aspect_ratio: str = "9:16"
    resolution: str = "720p"
    prompt: Optional[str] = None  # Overrides the prompt built from the script
    use_reference: bool = True  # Use the newest user-uploaded image as first frame

    @field_validator("aspect_ratio")
    @classmethod
    def _check_aspect_ratio(cls, value: str) -> str:
        from adgen.config import VIDEO_ASPECT_RATIOS
        if value not in VIDEO_ASPECT_RATIOS:
            raise ValueError(f"aspect_ratio must be one of {', '.join(VIDEO_ASPECT_RATIOS)}")
        return value

    @field_validator("resolution")
    @classmethod
    def _check_resolution(cls, value: str) -> str:
        from adgen.config import VIDEO_RESOLUTIONS
        if value not in VIDEO_RESOLUTIONS:
            raise ValueError(f"resolution must be one of {', '.join(VIDEO_RESOLUTIONS)}")
        return value


class ImageGenerationRequest(BaseModel):
    """Request to generate an image, or edit one when a reference is supplied"""
    prompt: str
    aspect_ratio: str = "1:1"
    use_reference: bool = False  # Edit the newest user-uploaded image
    attachment: Optional[AttachmentPayload] = None  # Explicit image to edit

    @field_validator("aspect_ratio")
    @classmethod
    def _check_aspect_ratio(cls, value: str) -> str:
        from adgen.config import IMAGE_ASPECT_RATIOS
        if value not in IMAGE_ASPECT_RATIOS:
            raise ValueError(f"aspect_ratio must be one of {', '.join(IMAGE_ASPECT_RATIOS)}")
        return value


# === Response Models ===

class GenerationStatusResponse(BaseModel):
    """Read-only view of the orchestrator"""
    status: str  # "idle", "checking-auth", "generating", "polling", "completed", "error"
    kind: Optional[str] = None
    result_uri: Optional[str] = None
    error_kind: Optional[str] = None
    error_message: Optional[str] = None
    auth_prompt_requested: bool = False
    updated_at: float
