"""
Reference selection: newest attachment in the history matching a predicate.
"""

from typing import Callable, Iterable, Optional, Sequence

from adgen.models import Attachment, AttachmentKind, Message, Role

AttachmentPredicate = Callable[[Message, Attachment], bool]


def is_image(message: Message, attachment: Attachment) -> bool:
    return attachment.kind is AttachmentKind.IMAGE


def is_video(message: Message, attachment: Attachment) -> bool:
    return attachment.kind is AttachmentKind.VIDEO


def from_user(message: Message, attachment: Attachment) -> bool:
    return message.role is Role.USER


def all_of(*predicates: AttachmentPredicate) -> AttachmentPredicate:
    """Combine predicates; the result matches when every one of them does."""
    def _combined(message: Message, attachment: Attachment) -> bool:
        return all(predicate(message, attachment) for predicate in predicates)
    return _combined


# Default for generation: the product shot the user uploaded most recently
user_image = all_of(from_user, is_image)


def select_reference(
    history: Sequence[Message] | Iterable[Message],
    predicate: Optional[AttachmentPredicate] = None,
) -> Optional[Attachment]:
    """
    Scan newest to oldest and return the first attachment accepted by `predicate`.

    With no predicate any attachment matches. Returns None when nothing does.
    """
    messages = history if isinstance(history, Sequence) else list(history)
    for message in reversed(messages):
        attachment = message.attachment
        if attachment is None:
            continue
        if predicate is None or predicate(message, attachment):
            return attachment
    return None
