"""WebSocket adapter: talks OneBot 11 over a WebSocket connection."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Sequence

import websockets

from bocchi.api import ApiRequest, ApiResponse
from bocchi.caller import Caller, extract_match_unions
from bocchi.chain import Context, MatchUnion, dispatch_event
from bocchi.errors import CallTimeoutError, NotStartedError, WebSocketError
from bocchi.event import parse_event
from bocchi.plugin import Plugin

logger = logging.getLogger(__name__)

CALL_TIMEOUT = 5.0
_QUEUE_SIZE = 32


class WsAdapter(Caller):
    """Runs the bot over a WebSocket connection and serves API calls through it."""

    def __init__(self, connection: Any, *, call_timeout: float = CALL_TIMEOUT) -> None:
        self._connection = connection
        self._pending: dict[int, asyncio.Future[ApiResponse]] = {}
        self._requests: asyncio.Queue[ApiRequest] | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self.call_timeout = call_timeout

    @classmethod
    async def connect(cls, address: str) -> "WsAdapter":
        """Open a WebSocket connection to the OneBot server."""
        return cls(await websockets.connect(address))

    async def run(self, plugins: Iterable[Plugin]) -> None:
        """Serve events and API calls until the connection ends.

        Returns when the server closes the connection; raises what broke it otherwise.
        """
        connection = self._connection
        if connection is None:
            raise WebSocketError()
        self._connection = None
        logger.info("Bot started")
        self._requests = asyncio.Queue(maxsize=_QUEUE_SIZE)
        all_plugins = tuple(plugins)
        match_unions = extract_match_unions(all_plugins)
        sender = asyncio.create_task(self._send_loop(connection, self._requests))
        receiver = asyncio.create_task(self._receive_loop(connection, all_plugins, match_unions))
        try:
            done, _ = await asyncio.wait({sender, receiver}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (sender, receiver):
                task.cancel()
            await asyncio.gather(sender, receiver, return_exceptions=True)
            await connection.close()
        finished = receiver if receiver in done else sender
        name = "Receive message task" if finished is receiver else "Send request task"
        error = finished.exception()
        logger.error("%s exited: %r", name, error)
        if error is not None:
            raise error

    async def call(self, request: ApiRequest) -> ApiResponse:
        if self._requests is None:
            raise NotStartedError()
        future: asyncio.Future[ApiResponse] = asyncio.get_running_loop().create_future()
        self._pending[request.echo] = future
        try:
            await self._requests.put(request)
            try:
                return await asyncio.wait_for(future, self.call_timeout)
            except asyncio.TimeoutError:
                raise CallTimeoutError() from None
        finally:
            self._pending.pop(request.echo, None)

    @staticmethod
    async def _send_loop(connection: Any, requests: "asyncio.Queue[ApiRequest]") -> None:
        while True:
            request = await requests.get()
            await connection.send(request.to_json())

    async def _receive_loop(
        self, connection: Any, plugins: Sequence[Plugin], match_unions: list[MatchUnion]
    ) -> None:
        async for message in connection:
            if isinstance(message, str):
                self._handle_text(message, plugins, match_unions)
        logger.error("Connection closed")

    def _handle_text(self, text: str, plugins: Sequence[Plugin], match_unions: list[MatchUnion]) -> None:
        try:
            response = ApiResponse.from_json(text)
        except ValueError:
            response = None
        if response is not None:
            future = self._pending.pop(response.echo, None)
            if future is None:
                logger.error("Received response with unknown request ID: %s", text)
            elif future.done():
                logger.error("Failed to send response: %r", response)
            else:
                future.set_result(response)
            return
        try:
            event = parse_event(text)
        except ValueError:
            logger.warning("Receive unknown message: %s", text)
            return
        logger.debug("Receive event: %r", event)
        context = Context(caller=self, event=event, plugins=plugins)
        task = asyncio.create_task(self._dispatch(match_unions, context))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @staticmethod
    async def _dispatch(match_unions: list[MatchUnion], context: Context) -> None:
        try:
            await dispatch_event(match_unions, context)
        except Exception:
            logger.exception("Event dispatch aborted")