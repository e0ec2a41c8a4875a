"""Records kept by the bot: check-in points and chat memory."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from bocchi.event import Sender


@dataclass
class CachedMessage:
    """A remembered chat line; no sender means the bot said it."""

    sender: Sender | None
    content: str

    def to_gpt_message(self) -> dict[str, Any]:
        role = "user" if self.sender is not None else "assistant"
        return {"role": role, "content": self.content}


@dataclass
class Memory:
    """Chat history kept under an id."""

    id: str
    history: deque[CachedMessage] = field(default_factory=deque)


def _yesterday() -> datetime:
    return datetime.now().astimezone() - timedelta(days=1)


@dataclass
class Point:
    """A user's check-in points."""

    id: int
    name: str
    point: int = 0
    last_update: datetime = field(default_factory=_yesterday)

    @classmethod
    def fresh(cls, id: int, name: str) -> "Point":
        """A record with no points, last updated yesterday so the first check-in counts."""
        return cls(id=id, name=name, point=0, last_update=_yesterday())