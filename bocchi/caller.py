"""The API caller interface and typed API calls built on it."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable

from bocchi.api import (
    Action,
    ApiRequest,
    ApiResponse,
    DeleteMsgParams,
    GetForwardMsgParams,
    GetForwardMsgResult,
    GetLoginInfoResult,
    GetMsgParams,
    GetMsgResult,
    SendForwardMsgParams,
    SendGroupMsgParams,
    SendMsgParams,
    SendMsgResult,
    SendPrivateMsgParams,
    SetMsgEmojiLikeParams,
)
from bocchi.chain import MatchUnion
from bocchi.errors import ResponseTypeError

if TYPE_CHECKING:
    from bocchi.plugin import Plugin

_TYPED_RESULTS = (GetLoginInfoResult, SendMsgResult, GetMsgResult, GetForwardMsgResult)


class Caller(ABC):
    """Something that can send API requests and await their responses."""

    @abstractmethod
    async def call(self, request: ApiRequest) -> ApiResponse:
        """Send a request and return its response."""

    async def _typed(self, request: ApiRequest, expected: type) -> Any:
        body = (await self.call(request)).data
        if not isinstance(body, expected):
            raise ResponseTypeError(body)
        return body

    async def _fallback(self, request: ApiRequest) -> Any:
        body = (await self.call(request)).data
        if isinstance(body, _TYPED_RESULTS):
            raise ResponseTypeError(body)
        return body

    async def get_login_info(self) -> GetLoginInfoResult:
        return await self._typed(ApiRequest(action=Action.GET_LOGIN_INFO), GetLoginInfoResult)

    async def send_private_msg(self, params: SendPrivateMsgParams) -> SendMsgResult:
        return await self._typed(ApiRequest.of(params), SendMsgResult)

    async def send_group_msg(self, params: SendGroupMsgParams) -> SendMsgResult:
        return await self._typed(ApiRequest.of(params), SendMsgResult)

    async def send_msg(self, params: SendMsgParams) -> SendMsgResult:
        return await self._typed(ApiRequest.of(params), SendMsgResult)

    async def delete_msg(self, params: DeleteMsgParams) -> Any:
        return await self._fallback(ApiRequest.of(params))

    async def get_msg(self, params: GetMsgParams) -> GetMsgResult:
        return await self._typed(ApiRequest.of(params), GetMsgResult)

    async def get_forward_msg(self, params: GetForwardMsgParams) -> GetForwardMsgResult:
        return await self._typed(ApiRequest.of(params), GetForwardMsgResult)

    async def set_msg_emoji_like(self, params: SetMsgEmojiLikeParams) -> Any:
        return await self._fallback(ApiRequest.of(params))

    async def send_forward_msg(self, params: SendForwardMsgParams) -> SendMsgResult:
        return await self._typed(ApiRequest.of(params), SendMsgResult)


def extract_match_unions(plugins: Iterable["Plugin"]) -> list[MatchUnion]:
    """All handlers of all plugins, highest priority first, stable within a priority."""
    unions = [union for plugin in plugins for union in plugin.match_unions]
    return sorted(unions, key=lambda union: union.priority, reverse=True)