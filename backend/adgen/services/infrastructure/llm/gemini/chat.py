"""
Gemini chat client - streaming script-writing conversation
"""

from typing import AsyncIterator, Optional

from google.genai import types

from adgen.config.models import CHAT_MODEL, ModelConfig
from adgen.core import get_logger
from adgen.models import Attachment
from adgen.services.conversation.prompts import SYSTEM_INSTRUCTION
from adgen.services.generation.ports import ChatClient

from .client import GeminiClientProvider

logger = get_logger(__name__, component="gemini_chat")


class GeminiChatClient(ChatClient):
    """One multi-turn Gemini chat; the remote history lives in the SDK chat object."""

    def __init__(
        self,
        provider: GeminiClientProvider,
        model: ModelConfig = CHAT_MODEL,
        system_instruction: str = SYSTEM_INSTRUCTION,
    ):
        self._provider = provider
        self._model = model
        self._system_instruction = system_instruction
        self._chat = None

    def _get_chat(self):
        if self._chat is None:
            client = self._provider.get()
            self._chat = client.aio.chats.create(
                model=self._model.model_name,
                config=types.GenerateContentConfig(
                    system_instruction=self._system_instruction,
                    temperature=self._model.temperature,
                ),
            )
            logger.info("Chat session created", extra={"model": self._model.model_name})
        return self._chat

    @staticmethod
    def _build_parts(text: str, attachment: Optional[Attachment]) -> list:
        parts = []
        if attachment is not None:
            parts.append(types.Part.from_bytes(data=attachment.decode(), mime_type=attachment.mime_type))
        parts.append(types.Part.from_text(text=text))
        return parts

    async def stream_reply(self, text: str, attachment: Optional[Attachment] = None) -> AsyncIterator[str]:
        chat = self._get_chat()
        stream = await chat.send_message_stream(message=self._build_parts(text, attachment))
        async for chunk in stream:
            # Chunks carrying only metadata have no text
            if chunk.text:
                yield chunk.text
