"""
Chat routes - stream script-writing replies and expose the parsed script
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from ..core import ConversationBusyError
from ..models import (
    ChatRequest,
    ConversationResponse,
    MessageResponse,
    ScriptResponse,
)
from ..services.container import Studio
from .dependencies import get_studio

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("")
async def send_message(payload: ChatRequest, studio: Studio = Depends(get_studio)):
    """Send a user turn; the reply streams back as plain text chunks"""
    attachment = payload.attachment.to_attachment() if payload.attachment else None
    try:
        turn = studio.chat_session.start_turn(payload.text, attachment)
    except ConversationBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return StreamingResponse(
        studio.chat_session.stream_turn(turn),
        media_type="text/plain; charset=utf-8",
        headers={"X-Message-ID": turn.reply.id},
    )


@router.get("/messages", response_model=ConversationResponse)
async def list_messages(studio: Studio = Depends(get_studio)):
    """Full conversation, oldest first (attachment payloads omitted)"""
    messages = [
        MessageResponse(**message.to_dict())
        for message in studio.chat_session.conversation.messages
    ]
    return ConversationResponse(messages=messages)


@router.get("/script", response_model=ScriptResponse)
async def get_script(studio: Studio = Depends(get_studio)):
    """Newest parsed script and the video prompt built from it"""
    preview = studio.generation.preview_script()
    if preview is None:
        raise HTTPException(status_code=404, detail="No script has been written yet")

    return ScriptResponse(
        **preview.script.to_dict(),
        prompt=preview.prompt,
        has_reference_image=preview.has_reference_image,
        source_message_id=preview.source_message_id,
    )
