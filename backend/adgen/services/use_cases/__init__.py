"""
Use Cases package - Business logic layer.

Modules:
- base: Base use case abstract class
- generation_use_case: Build job configs from the chat state and run them
"""

from .base import UseCase
from .generation_use_case import GenerationUseCase, ScriptPreview, StartedJob

__all__ = [
    "UseCase",
    "GenerationUseCase",
    "ScriptPreview",
    "StartedJob",
]
