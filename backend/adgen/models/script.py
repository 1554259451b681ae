"""
Script models

`ScriptData` is the structured view of a Markdown script written by the chat
assistant. `ScriptResponse` is the API schema for the script preview.
"""

from dataclasses import dataclass, asdict
from typing import Optional

from pydantic import BaseModel

DEFAULT_TITLE = "Untitled Video"
DEFAULT_VISUAL_STYLE = "Cinematic, high contrast"


@dataclass(frozen=True)
class ScriptData:
    title: str = DEFAULT_TITLE
    visual_style: str = DEFAULT_VISUAL_STYLE
    hook: str = ""
    body: str = ""
    cta: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


class ScriptResponse(BaseModel):
    """Latest parsed script plus the prompt it would generate"""
    title: str
    visual_style: str
    hook: str
    body: str
    cta: str
    prompt: str
    has_reference_image: bool = False
    source_message_id: Optional[str] = None
