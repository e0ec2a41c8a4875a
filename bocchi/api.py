"""OneBot 11 API requests and responses."""

from __future__ import annotations

import json
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Protocol, Union

from bocchi.message import MessageContent, content_from_json, content_to_json


class Action(str, Enum):
    """API action names."""

    GET_LOGIN_INFO = "get_login_info"
    SEND_PRIVATE_MSG = "send_private_msg"
    SEND_GROUP_MSG = "send_group_msg"
    SEND_MSG = "send_msg"
    DELETE_MSG = "delete_msg"
    GET_MSG = "get_msg"
    GET_FORWARD_MSG = "get_forward_msg"
    SET_MSG_EMOJI_LIKE = "set_msg_emoji_like"
    SEND_FORWARD_MSG = "send_forward_msg"


def _field(data: Any, key: str, kind: type | tuple[type, ...]) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise ValueError(f"missing field {key!r}")
    value = data[key]
    if not isinstance(value, kind) or (isinstance(value, bool) and kind is int):
        raise ValueError(f"field {key!r} has wrong type: {value!r}")
    return value


class _Params(Protocol):
    ACTION: ClassVar[Action]

    def to_dict(self) -> dict[str, Any]: ...


@dataclass
class SendPrivateMsgParams:
    ACTION: ClassVar[Action] = Action.SEND_PRIVATE_MSG
    user_id: int
    message: MessageContent
    auto_escape: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "message": content_to_json(self.message),
            "auto_escape": self.auto_escape,
        }


@dataclass
class SendGroupMsgParams:
    ACTION: ClassVar[Action] = Action.SEND_GROUP_MSG
    group_id: int
    message: str
    auto_escape: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"group_id": self.group_id, "message": self.message, "auto_escape": self.auto_escape}


@dataclass
class SendMsgParams:
    ACTION: ClassVar[Action] = Action.SEND_MSG
    message: MessageContent
    user_id: int | None = None
    group_id: int | None = None
    auto_escape: bool = False
    message_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.message_type is not None:
            result["message_type"] = self.message_type
        result.update(
            user_id=self.user_id,
            group_id=self.group_id,
            message=content_to_json(self.message),
            auto_escape=self.auto_escape,
        )
        return result


@dataclass
class SendMsgResult:
    message_id: int

    @classmethod
    def from_dict(cls, data: Any) -> "SendMsgResult":
        return cls(message_id=_field(data, "message_id", int))


@dataclass
class DeleteMsgParams:
    ACTION: ClassVar[Action] = Action.DELETE_MSG
    message_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"message_id": self.message_id}


@dataclass
class GetMsgParams:
    ACTION: ClassVar[Action] = Action.GET_MSG
    message_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"message_id": self.message_id}


@dataclass
class GetMsgResult:
    time: int
    message_type: str
    message_id: int
    real_id: int
    sender: Any
    message: str

    @classmethod
    def from_dict(cls, data: Any) -> "GetMsgResult":
        if not isinstance(data, dict) or "sender" not in data:
            raise ValueError("missing field 'sender'")
        return cls(
            time=_field(data, "time", int),
            message_type=_field(data, "message_type", str),
            message_id=_field(data, "message_id", int),
            real_id=_field(data, "real_id", int),
            sender=data["sender"],
            message=_field(data, "message", str),
        )


@dataclass
class GetForwardMsgParams:
    ACTION: ClassVar[Action] = Action.GET_FORWARD_MSG
    id: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id}


@dataclass
class GetForwardMsgResult:
    message: MessageContent

    @classmethod
    def from_dict(cls, data: Any) -> "GetForwardMsgResult":
        return cls(message=content_from_json(_field(data, "message", (str, list))))


@dataclass
class SetMsgEmojiLikeParams:
    ACTION: ClassVar[Action] = Action.SET_MSG_EMOJI_LIKE
    message_id: int
    emoji_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"message_id": self.message_id, "emoji_id": int(self.emoji_id)}


@dataclass
class GetLoginInfoResult:
    user_id: int
    nickname: str

    @classmethod
    def from_dict(cls, data: Any) -> "GetLoginInfoResult":
        return cls(user_id=_field(data, "user_id", int), nickname=_field(data, "nickname", str))


@dataclass
class SendForwardMsgParams:
    ACTION: ClassVar[Action] = Action.SEND_FORWARD_MSG
    message: MessageContent
    user_id: int | None = None
    group_id: int | None = None
    message_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.message_type is not None:
            result["message_type"] = self.message_type
        result.update(user_id=self.user_id, group_id=self.group_id, message=content_to_json(self.message))
        return result


def _new_echo() -> int:
    # Kept well under 64 bits so servers that parse JSON numbers as doubles keep it exact.
    return random.getrandbits(64) >> 16


@dataclass
class ApiRequest:
    """An action with its parameters and a random echo id."""

    action: Action
    params: _Params | None = None
    echo: int = field(default_factory=_new_echo)

    @classmethod
    def of(cls, params: _Params) -> "ApiRequest":
        return cls(action=params.ACTION, params=params)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"echo": self.echo, "action": Action(self.action).value}
        if self.params is not None:
            result["params"] = self.params.to_dict()
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))


ResponseBody = Union[GetLoginInfoResult, SendMsgResult, GetMsgResult, GetForwardMsgResult, Any]


def parse_response_body(data: Any) -> ResponseBody:
    """Return the first result type that fits the data, else the raw data."""
    for kind in (GetLoginInfoResult, SendMsgResult, GetMsgResult, GetForwardMsgResult):
        try:
            return kind.from_dict(data)
        except ValueError:
            continue
    return data


@dataclass
class ApiResponse:
    echo: int
    data: ResponseBody

    @classmethod
    def from_json(cls, text: str) -> "ApiResponse":
        """Parse a response frame; raises ValueError if it is not one."""
        raw = json.loads(text)
        echo = _field(raw, "echo", int)
        if echo < 0:
            raise ValueError(f"negative echo: {echo}")
        if "data" not in raw:
            raise ValueError("missing field 'data'")
        return cls(echo=echo, data=parse_response_body(raw["data"]))