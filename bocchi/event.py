"""OneBot 11 events pushed by the server."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from typing import Any, Callable, ClassVar

from bocchi.errors import EventKindError
from bocchi.message import MessageContent, Text, content_from_json

_MESSAGE_ATTRS = frozenset(
    {"sender", "message", "user_id", "group_id", "nickname", "message_id", "plain_text"}
)

Reader = Callable[[dict, str], Any]


def _check(value: Any, key: str, kind: type | tuple[type, ...]) -> Any:
    if not isinstance(value, kind) or (isinstance(value, bool) and kind is int):
        raise ValueError(f"field {key!r} has wrong type: {value!r}")
    return value


def _field(data: Any, key: str, kind: type | tuple[type, ...]) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise ValueError(f"missing field {key!r}")
    return _check(data[key], key, kind)


def _optional(data: dict, key: str, kind: type) -> Any:
    value = data.get(key)
    return None if value is None else _check(value, key, kind)


def _required(kind: type | tuple[type, ...]) -> Reader:
    return lambda data, key: _field(data, key, kind)


def _present(data: dict, key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing field {key!r}")
    return data[key]


@dataclass
class Sender:
    user_id: int | None = None
    nickname: str | None = None
    card: str | None = None
    sex: str | None = None
    age: int | None = None
    area: str | None = None
    level: str | None = None
    role: str | None = None
    title: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Sender":
        if not isinstance(data, dict):
            raise ValueError(f"sender must be an object: {data!r}")
        return cls(
            **{
                f.name: _optional(data, f.name, int if f.name in ("user_id", "age") else str)
                for f in fields(cls)
            }
        )


@dataclass
class Anonymous:
    id: int
    name: str
    flag: str


def _anonymous(data: dict, key: str) -> Anonymous | None:
    raw = data.get(key)
    if raw is None:
        return None
    return Anonymous(
        **{name: _field(raw, name, kind) for name, kind in (("id", int), ("name", str), ("flag", str))}
    )


_INT = _required(int)
_STR = _required(str)
_HEADER: tuple[tuple[str, Reader], ...] = (
    ("time", _INT),
    ("self_id", _INT),
    ("post_type", _STR),
)
_MESSAGE_HEAD = _HEADER + (
    ("message_type", _STR),
    ("sub_type", _STR),
    ("message_id", _INT),
    ("user_id", _INT),
)
_MESSAGE_BODY: tuple[tuple[str, Reader], ...] = (
    ("message", lambda data, key: content_from_json(_field(data, key, (str, list)))),
    ("raw_message", _STR),
    ("font", _INT),
    ("sender", lambda data, key: Sender.from_dict(_field(data, key, dict))),
)
_META_HEAD = _HEADER + (("meta_event_type", _STR),)


class Event:
    """Base of all events; message attributes raise EventKindError elsewhere."""

    KIND: ClassVar[str] = "event"
    _SCHEMA: ClassVar[tuple[tuple[str, Reader], ...]] = ()

    def __getattr__(self, name: str) -> Any:
        if name in _MESSAGE_ATTRS:
            raise EventKindError(f"{name} read from non-message event {type(self).__name__}")
        raise AttributeError(name)

    @classmethod
    def from_dict(cls, data: Any) -> "Event":
        """Parse an event; on the base class the first fitting kind wins."""
        if cls is not Event:
            return cls._parse(data)
        for kind in (GroupMessage, PrivateMessage, LifeCycle, HeartBeat):
            try:
                return kind._parse(data)
            except ValueError:
                continue
        raise ValueError(f"not an event: {data!r}")

    @classmethod
    def _parse(cls, data: Any) -> "Event":
        if not cls._SCHEMA:
            raise ValueError("abstract event kind")
        if not isinstance(data, dict):
            raise ValueError(f"event must be an object: {data!r}")
        return cls(**{name: read(data, name) for name, read in cls._SCHEMA})


class _MessageEvent(Event):
    sender: Sender
    message: MessageContent

    @property
    def nickname(self) -> str:
        return self.sender.nickname or ""

    @property
    def plain_text(self) -> str:
        if isinstance(self.message, str):
            return self.message
        return "".join(seg.text for seg in self.message if isinstance(seg, Text))


@dataclass
class PrivateMessage(_MessageEvent):
    time: int
    self_id: int
    post_type: str
    message_type: str
    sub_type: str
    message_id: int
    user_id: int
    message: MessageContent
    raw_message: str
    font: int
    sender: Sender

    _SCHEMA = _MESSAGE_HEAD + _MESSAGE_BODY


@dataclass
class GroupMessage(_MessageEvent):
    time: int
    self_id: int
    post_type: str
    message_type: str
    sub_type: str
    message_id: int
    group_id: int
    user_id: int
    anonymous: Anonymous | None
    message: MessageContent
    raw_message: str
    font: int
    sender: Sender

    _SCHEMA = _MESSAGE_HEAD + (("group_id", _INT), ("anonymous", _anonymous)) + _MESSAGE_BODY


@dataclass
class LifeCycle(Event):
    time: int
    self_id: int
    post_type: str
    meta_event_type: str
    sub_type: str

    _SCHEMA = _META_HEAD + (("sub_type", _STR),)


@dataclass
class HeartBeat(Event):
    time: int
    self_id: int
    post_type: str
    meta_event_type: str
    status: Any
    interval: int

    _SCHEMA = _META_HEAD + (("status", _present), ("interval", _INT))


def parse_event(text: str) -> Event:
    """Parse an event frame; raises ValueError if it is not one."""
    return Event.from_dict(json.loads(text))