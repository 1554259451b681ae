"""
In-memory conversation history.

Messages are append-only and ordered. At most one assistant message is
streaming at any time; its text only grows while streaming and is frozen once
`finish_reply` is called.
"""

import threading
import uuid
from typing import List, Optional, Tuple

from adgen.core import ConversationBusyError
from adgen.models import Attachment, Message, Role


def _new_message_id() -> str:
    return uuid.uuid4().hex


class Conversation:
    """Ordered message log shared by the chat and generation flows."""

    def __init__(self, greeting: Optional[str] = None):
        self._messages: List[Message] = []
        self._streaming: Optional[Message] = None
        self._lock = threading.RLock()
        if greeting:
            self._messages.append(Message(id=_new_message_id(), role=Role.ASSISTANT, text=greeting))

    @property
    def messages(self) -> List[Message]:
        """Snapshot copy of the history, oldest first."""
        with self._lock:
            return list(self._messages)

    @property
    def is_streaming(self) -> bool:
        with self._lock:
            return self._streaming is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    def add_user_message(self, text: str, attachment: Optional[Attachment] = None) -> Message:
        with self._lock:
            message = Message(id=_new_message_id(), role=Role.USER, text=text, attachment=attachment)
            self._messages.append(message)
            return message

    def begin_assistant_reply(self) -> Message:
        """Append an empty assistant message and mark it as streaming."""
        with self._lock:
            if self._streaming is not None:
                raise ConversationBusyError("A reply is already being streamed")
            message = Message(id=_new_message_id(), role=Role.ASSISTANT, streaming=True)
            self._messages.append(message)
            self._streaming = message
            return message

    def start_turn(self, text: str, attachment: Optional[Attachment] = None) -> Tuple[Message, Message]:
        """Append a user message and the streaming reply to it in one step.

        Raises:
            ConversationBusyError: another reply is still streaming
        """
        with self._lock:
            if self._streaming is not None:
                raise ConversationBusyError("A reply is already being streamed")
            user_message = self.add_user_message(text, attachment)
            return user_message, self.begin_assistant_reply()

    def append_chunk(self, message_id: str, chunk: str) -> str:
        """Append to the streaming message and return its cumulative text."""
        with self._lock:
            message = self._streaming
            if message is None or message.id != message_id:
                raise ValueError(f"Message {message_id} is not streaming")
            message.text += chunk
            return message.text

    def finish_reply(self, message_id: str) -> Message:
        with self._lock:
            message = self._streaming
            if message is None or message.id != message_id:
                raise ValueError(f"Message {message_id} is not streaming")
            message.streaming = False
            self._streaming = None
            return message

    def latest_script_markdown(self) -> Optional[str]:
        """Text of the newest assistant message that contains a Markdown title."""
        with self._lock:
            for message in reversed(self._messages):
                if message.role is Role.ASSISTANT and "# " in message.text:
                    return message.text
        return None
