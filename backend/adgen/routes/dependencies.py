"""
Route dependencies
"""

from fastapi import Request

from ..services.container import Studio


def get_studio(request: Request) -> Studio:
    """Studio wired by the application lifespan."""
    return request.app.state.studio
