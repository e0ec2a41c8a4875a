"""Exceptions raised by the bot framework."""

from __future__ import annotations

from typing import Any


class BocchiError(Exception):
    """Base class of every error raised by the framework."""


class ApiError(BocchiError):
    """An API call returned something unusable."""


class ResponseTypeError(ApiError):
    """The response body did not have the type the API call expects."""

    def __init__(self, body: Any) -> None:
        super().__init__(f"Invalid Response Type: {body!r}")
        self.body = body


class ConnectError(BocchiError):
    """A problem with the connection to the OneBot server."""


class NotStartedError(ConnectError):
    """An API call was made before the bot was started."""

    def __init__(self, status: str = "Bot not started") -> None:
        super().__init__(f"Invalid status: {status}")
        self.status = status


class CallTimeoutError(ConnectError, TimeoutError):
    """An API call got no response in time."""

    def __init__(self) -> None:
        super().__init__("Call api timeout")


class WebSocketError(ConnectError):
    """The WebSocket connection is missing or broken."""

    def __init__(self, detail: str = "WebSocket error") -> None:
        super().__init__(detail)


class EventKindError(BocchiError, AttributeError):
    """A message-only attribute was read from an event that does not carry it."""