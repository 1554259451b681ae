"""
Credential routes - the "select API key" flow for the paid video models
"""

from pydantic import BaseModel, Field
from fastapi import APIRouter, Depends, HTTPException

from ..services.container import Studio
from .dependencies import get_studio

router = APIRouter(prefix="/auth", tags=["auth"])


class ApiKeyRequest(BaseModel):
    api_key: str = Field(min_length=1)


class AuthStatusResponse(BaseModel):
    has_access: bool
    key_selected: bool
    prompt_requested: bool
    use_vertex_ai: bool


async def _auth_status(studio: Studio) -> AuthStatusResponse:
    gate = studio.auth_gate
    return AuthStatusResponse(
        has_access=await gate.check(),
        key_selected=gate.has_selected_key,
        prompt_requested=gate.prompt_requested,
        use_vertex_ai=gate.uses_vertex_ai,
    )


@router.post("/api-key", response_model=AuthStatusResponse)
async def select_api_key(payload: ApiKeyRequest, studio: Studio = Depends(get_studio)):
    """
    Store the key chosen by the user. Generation has to be requested again
    afterwards; a denied request is not resumed.
    """
    try:
        studio.auth_gate.set_key(payload.api_key)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return await _auth_status(studio)


@router.get("/status", response_model=AuthStatusResponse)
async def auth_status(studio: Studio = Depends(get_studio)):
    return await _auth_status(studio)
