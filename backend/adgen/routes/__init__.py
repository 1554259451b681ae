"""
Routes module - contains all API route handlers
"""

from .auth import router as auth_router
from .chat import router as chat_router
from .generation import router as generation_router

__all__ = [
    "auth_router",
    "chat_router",
    "generation_router",
]
