from __future__ import annotations

from typing import Iterable, Mapping, Union

from chatrag.exceptions import UnknownMessageTypeError
from chatrag.models import Message, MessageType

SPEAKER_LABELS = {
    MessageType.HUMAN: "Human",
    MessageType.AI: "AI",
}


def _format_line(message: Union[Message, Mapping], position: int) -> str:
    if isinstance(message, Message):
        raw_type, text = message.type, message.text
    else:
        raw_type, text = message["type"], message["text"]

    try:
        message_type = MessageType(raw_type)
    except ValueError as exc:
        raise UnknownMessageTypeError(raw_type, position) from exc

    return f"{SPEAKER_LABELS[message_type]}: {text}"


def format_conv_history(messages: Iterable[Union[Message, Mapping]]) -> str:
    """Render chat turns as a "Human: ..." / "AI: ..." transcript, one line per turn.

    Raises UnknownMessageTypeError for a tag other than "human" or "ai".
    """
    return "\n".join(
        _format_line(message, position) for position, message in enumerate(messages)
    )
