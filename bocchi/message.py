"""OneBot 11 message segments and message content."""

from __future__ import annotations

from dataclasses import MISSING, dataclass, fields
from typing import Any, ClassVar, Union

_REGISTRY: dict[str, type["MessageSegment"]] = {}


@dataclass
class MessageSegment:
    """One segment of an array-form message."""

    TYPE: ClassVar[str] = ""

    def __init_subclass__(cls, type_name: str | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if type_name:
            cls.TYPE = type_name
            _REGISTRY.setdefault(type_name, cls)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form: {"type": ..., "data": {...}}."""
        own_fields = fields(self)
        if not own_fields:
            return {"type": self.TYPE}
        payload: dict[str, Any] = {}
        for f in own_fields:
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(self, Node) and f.name == "content":
                value = content_to_json(value)
            payload[f.name] = value
        return {"type": self.TYPE, "data": payload}

    @classmethod
    def from_dict(cls, data: Any) -> "MessageSegment":
        """Build a segment from its wire form; raises ValueError if malformed."""
        if not isinstance(data, dict) or not isinstance(data.get("type"), str):
            raise ValueError(f"not a message segment: {data!r}")
        seg_type = data["type"]
        payload = data.get("data") or {}
        if not isinstance(payload, dict):
            raise ValueError(f"segment data must be an object: {payload!r}")
        if seg_type == "music" and payload.get("type") == "custom":
            target: type[MessageSegment] = CustomMusic
        else:
            try:
                target = _REGISTRY[seg_type]
            except KeyError:
                raise ValueError(f"unknown segment type: {seg_type!r}") from None
        kwargs: dict[str, Any] = {}
        for f in fields(target):
            if f.name in payload:
                value = payload[f.name]
                if target is Node and f.name == "content" and value is not None:
                    value = content_from_json(value)
                kwargs[f.name] = value
            elif f.default is MISSING:
                raise ValueError(f"segment {seg_type!r} is missing field {f.name!r}")
        return target(**kwargs)


@dataclass
class Text(MessageSegment, type_name="text"):
    text: str


@dataclass
class Face(MessageSegment, type_name="face"):
    id: str


@dataclass
class Image(MessageSegment, type_name="image"):
    file: str
    type: str | None = None
    url: str | None = None
    cache: bool | None = None
    proxy: bool | None = None
    timeout: int | None = None


@dataclass
class Record(MessageSegment, type_name="record"):
    file: str
    magic: bool | None = None
    url: str | None = None
    cache: bool | None = None
    proxy: bool | None = None
    timeout: int | None = None


@dataclass
class Video(MessageSegment, type_name="video"):
    file: str
    url: str | None = None
    cache: bool | None = None
    proxy: bool | None = None
    timeout: int | None = None


@dataclass
class At(MessageSegment, type_name="at"):
    qq: str


@dataclass
class Rps(MessageSegment, type_name="rps"):
    pass


@dataclass
class Dice(MessageSegment, type_name="dice"):
    pass


@dataclass
class Shake(MessageSegment, type_name="shake"):
    pass


@dataclass
class Poke(MessageSegment, type_name="poke"):
    type: str
    id: str
    name: str | None = None


@dataclass
class Anonymous(MessageSegment, type_name="anonymous"):
    ignore: bool | None = None


@dataclass
class Share(MessageSegment, type_name="share"):
    url: str
    title: str
    content: str | None = None
    image: str | None = None


@dataclass
class Contact(MessageSegment, type_name="contact"):
    type: str
    id: str


@dataclass
class Location(MessageSegment, type_name="location"):
    lat: str
    lon: str
    title: str | None = None
    content: str | None = None


@dataclass
class Music(MessageSegment, type_name="music"):
    type: str
    id: str


@dataclass
class CustomMusic(MessageSegment, type_name="music"):
    type: str
    url: str
    audio: str
    title: str
    content: str | None = None
    image: str | None = None


@dataclass
class Reply(MessageSegment, type_name="reply"):
    id: str


@dataclass
class Forward(MessageSegment, type_name="forward"):
    id: str


@dataclass
class Node(MessageSegment, type_name="node"):
    id: str | None = None
    user_id: str | None = None
    nickname: str | None = None
    content: "MessageContent | None" = None


@dataclass
class Xml(MessageSegment, type_name="xml"):
    data: str


@dataclass
class Json(MessageSegment, type_name="json"):
    data: str


MessageContent = Union[str, list[MessageSegment]]


def content_to_json(content: MessageContent) -> Any:
    """Return the wire form of message content: a string or a list of segments."""
    if isinstance(content, str):
        return content
    return [segment.to_dict() for segment in content]


def content_from_json(data: Any) -> MessageContent:
    """Parse message content from its wire form; raises ValueError if malformed."""
    if isinstance(data, str):
        return data
    if isinstance(data, list):
        return [MessageSegment.from_dict(item) for item in data]
    raise ValueError(f"not message content: {data!r}")