"""
Script parsing and prompt construction
"""

from .extractor import extract_script, normalize_newlines
from .prompt_builder import build_video_prompt

__all__ = ["extract_script", "normalize_newlines", "build_video_prompt"]
