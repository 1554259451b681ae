"""
Chat session - streams assistant replies into the conversation

Every chunk is appended to the streaming assistant message and the script
extractor is re-run on the cumulative text. The newest successfully parsed
script is cached for the generation flow.
"""

import threading
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from adgen.core import get_logger
from adgen.models import Attachment, Message, ScriptData
from adgen.services.generation.ports import ChatClient
from adgen.services.script import extract_script

from .history import Conversation
from .prompts import ATTACHMENT_ONLY_PROMPT, GREETING, STREAM_ERROR_REPLY

logger = get_logger(__name__, component="chat_session")


@dataclass(frozen=True)
class ChatTurn:
    """A user message and the assistant reply being streamed for it"""
    user_message: Message
    reply: Message
    prompt_text: str


class ChatSession:
    """Conversation plus the chat model that writes into it."""

    def __init__(
        self,
        client: ChatClient,
        conversation: Optional[Conversation] = None,
        exact_headings: bool = False,
    ):
        self._client = client
        self._conversation = conversation if conversation is not None else Conversation(greeting=GREETING)
        self._exact_headings = exact_headings
        self._lock = threading.RLock()
        self._latest_script: Optional[ScriptData] = None
        self._script_message_id: Optional[str] = None

    @property
    def conversation(self) -> Conversation:
        return self._conversation

    @property
    def latest_script(self) -> Optional[ScriptData]:
        with self._lock:
            return self._latest_script

    @property
    def script_message_id(self) -> Optional[str]:
        with self._lock:
            return self._script_message_id

    def start_turn(self, text: str, attachment: Optional[Attachment] = None) -> ChatTurn:
        """
        Record the user message and open the assistant reply.

        Raises:
            ValueError: neither text nor attachment was given
            ConversationBusyError: a reply is still streaming
        """
        text = (text or "").strip()
        if not text and attachment is None:
            raise ValueError("Message text or an attachment is required")

        user_message, reply = self._conversation.start_turn(text, attachment)
        return ChatTurn(
            user_message=user_message,
            reply=reply,
            prompt_text=text or ATTACHMENT_ONLY_PROMPT,
        )

    async def stream_turn(self, turn: ChatTurn) -> AsyncIterator[str]:
        """Yield reply chunks for a started turn; the reply is frozen when done."""
        reply_id = turn.reply.id
        chunk_count = 0
        try:
            async for chunk in self._client.stream_reply(turn.prompt_text, turn.user_message.attachment):
                if not chunk:
                    continue
                chunk_count += 1
                self._on_chunk(reply_id, chunk)
                yield chunk
        except Exception as e:
            logger.error(
                "Chat stream failed",
                extra={"error": str(e), "chunks_received": chunk_count},
                exc_info=True,
            )
            self._on_chunk(reply_id, STREAM_ERROR_REPLY)
            yield STREAM_ERROR_REPLY
        finally:
            self._conversation.finish_reply(reply_id)
            logger.info("Chat reply finished", extra={"chunks": chunk_count, "message_id": reply_id})

    async def send(self, text: str, attachment: Optional[Attachment] = None) -> AsyncIterator[str]:
        """Start a turn and stream its reply."""
        turn = self.start_turn(text, attachment)
        async for chunk in self.stream_turn(turn):
            yield chunk

    def _on_chunk(self, reply_id: str, chunk: str) -> None:
        cumulative = self._conversation.append_chunk(reply_id, chunk)
        script = extract_script(cumulative, exact_headings=self._exact_headings)
        if script is None:
            return
        with self._lock:
            self._latest_script = script
            self._script_message_id = reply_id
