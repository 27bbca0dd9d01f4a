"""Conversation transcript shown on the chat screen."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

Role = Literal["user", "assistant", "thinking"]


@dataclass(frozen=True)
class Message:
    """A single transcript entry."""

    role: Role
    content: str
    is_markup: bool = False  # Render content as Markdown
    notice: bool = False  # Session status line, not part of the conversation
    timestamp: datetime = field(default_factory=datetime.now)


class Transcript:
    """
    Append-only, ordered list of messages.

    The only removal is :meth:`pop_message`, used to drop the transient
    "thinking" entry once the reply is known.
    """

    def __init__(self, messages: list[Message] | None = None) -> None:
        self._messages: list[Message] = list(messages) if messages else []

    def append_message(self, message: Message) -> None:
        self._messages.append(message)

    def pop_message(self) -> Message:
        """Remove and return the newest message."""
        if not self._messages:
            raise IndexError("pop from empty transcript")
        return self._messages.pop()

    @property
    def messages(self) -> list[Message]:
        """A copy of the messages, oldest first."""
        return list(self._messages)

    def conversation(self) -> list[Message]:
        """User and assistant messages, without notices or thinking entries."""
        return [m for m in self._messages if m.role != "thinking" and not m.notice]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)
