"""
Model Configuration

Defines the Gemini models used by the studio:
    - chat:  script-writing assistant (streams Markdown scripts)
    - video: Veo text/image-to-video generation (long-running operation)
    - image: image generation and editing

Each model can be overridden through the environment:
    ADGEN_CHAT_MODEL, ADGEN_VIDEO_MODEL, ADGEN_IMAGE_MODEL
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ModelConfig:
    """Configuration for a single model"""
    model_name: str
    temperature: Optional[float] = None
    description: str = ""


def _model_from_env(env_name: str, default: str) -> str:
    value = (os.getenv(env_name) or "").strip()
    return value or default


CHAT_MODEL = ModelConfig(
    model_name=_model_from_env("ADGEN_CHAT_MODEL", "gemini-3-pro-preview"),
    temperature=0.7,
    description="Marketing director / scriptwriter chat",
)

VIDEO_MODEL = ModelConfig(
    model_name=_model_from_env("ADGEN_VIDEO_MODEL", "veo-3.1-fast-generate-preview"),
    description="Veo video generation (fast variant for interactivity)",
)

IMAGE_MODEL = ModelConfig(
    model_name=_model_from_env("ADGEN_IMAGE_MODEL", "gemini-2.5-flash-image"),
    description="Image generation and reference-based editing",
)

VIDEO_ASPECT_RATIOS = ("16:9", "9:16")
VIDEO_RESOLUTIONS = ("720p", "1080p")
IMAGE_ASPECT_RATIOS = ("1:1", "2:3", "3:2", "3:4", "4:3", "9:16", "16:9", "21:9")


def list_models() -> dict:
    """Return the active model per role (used by the health endpoint)."""
    return {
        "chat": CHAT_MODEL.model_name,
        "video": VIDEO_MODEL.model_name,
        "image": IMAGE_MODEL.model_name,
    }
