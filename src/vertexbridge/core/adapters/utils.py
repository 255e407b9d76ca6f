"""Pure conversion helpers shared by adapter implementations."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..errors import AdapterError
from ..message import Message, MessageRole


def ensure_messages(messages: Sequence[Message]) -> tuple[Message, ...]:
    """Validate a conversation history and return it as a tuple."""

    if isinstance(messages, (str, bytes, bytearray)) or not isinstance(messages, Sequence):
        msg = "messages must be a sequence of Message instances"
        raise AdapterError(msg)
    if not messages:
        msg = "at least one message is required"
        raise AdapterError(msg)

    for index, message in enumerate(messages):
        if not isinstance(message, Message):
            msg = f"messages[{index}] must be a Message instance"
            raise AdapterError(msg)
    return tuple(messages)


def messages_to_anthropic(messages: Sequence[Message]) -> list[dict[str, Any]]:
    """Convert messages into the Anthropic Messages API format."""

    return [{"role": message.role.value, "content": message.content} for message in messages]


def last_message_to_gemini(messages: Sequence[Message]) -> list[dict[str, Any]]:
    """Build single-turn Gen AI contents from the final message of a history.

    Earlier turns are not forwarded and the final message is always sent with
    the ``user`` role, whatever role it had in the history.
    """

    last = messages[-1]
    return [{"role": MessageRole.USER.value, "parts": [{"text": last.content}]}]
