"""Conversation message schema shared across adapters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MessageRole(str, Enum):
    """Roles accepted in a conversation history."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True, slots=True)
class Message:
    """A single turn of the conversation passed to ``create_message``."""

    role: MessageRole
    content: str

    def __post_init__(self) -> None:
        if not isinstance(self.role, MessageRole):
            try:
                role = MessageRole(self.role)
            except ValueError as exc:
                msg = f"unsupported role {self.role!r}"
                raise ValueError(msg) from exc
            object.__setattr__(self, "role", role)

        if not isinstance(self.content, str):
            msg = "message content must be a string"
            raise TypeError(msg)
        if not self.content:
            msg = "message content cannot be empty"
            raise ValueError(msg)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=MessageRole.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role=MessageRole.ASSISTANT, content=content)
