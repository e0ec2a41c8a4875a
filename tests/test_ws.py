import asyncio
import contextlib
import json

import pytest

from bocchi.api import GetLoginInfoResult, SendMsgParams, SendMsgResult
from bocchi.errors import CallTimeoutError, NotStartedError, WebSocketError
from bocchi.plugin import Plugin
from bocchi.rules import Rule
from bocchi.ws import WsAdapter


class FakeConnection:
    def __init__(self, reply_data=None):
        self.incoming = asyncio.Queue()
        self.sent = []
        self.closed = False
        self.reply_data = reply_data

    async def send(self, text):
        self.sent.append(text)
        if self.reply_data is not None:
            self.push(json.dumps({"echo": json.loads(text)["echo"], "data": self.reply_data}))

    def push(self, item):
        self.incoming.put_nowait(item)

    def __aiter__(self):
        return self

    async def __anext__(self):
        item = await self.incoming.get()
        if item is None:
            raise StopAsyncIteration
        if isinstance(item, Exception):
            raise item
        return item

    async def close(self):
        self.closed = True


def event_frame(text="#ping", user_id=42):
    segments = [{"type": "text", "data": {"text": text}}]
    sender = {"user_id": user_id, "nickname": "bocchi"}
    return json.dumps(
        dict(time=1, self_id=2, post_type="message", message_type="group", sub_type="normal", message_id=7,
             group_id=100, user_id=user_id, message=segments, raw_message=text, font=0, sender=sender)
    )


async def start(adapter, plugins=()):
    runner = asyncio.create_task(adapter.run(list(plugins)))
    for _ in range(3):
        await asyncio.sleep(0)
    return runner


@contextlib.asynccontextmanager
async def running(adapter, conn, plugins=()):
    runner = await start(adapter, plugins)
    yield runner
    conn.push(None)
    await asyncio.wait_for(runner, 1)


@pytest.mark.asyncio
async def test_call_before_run_raises():
    with pytest.raises(NotStartedError):
        await WsAdapter(FakeConnection()).get_login_info()


@pytest.mark.asyncio
async def test_call_round_trip():
    conn = FakeConnection({"user_id": 10000, "nickname": "bocchi"})
    adapter = WsAdapter(conn)
    async with running(adapter, conn) as runner:
        assert await adapter.get_login_info() == GetLoginInfoResult(user_id=10000, nickname="bocchi")
        assert json.loads(conn.sent[0])["action"] == "get_login_info"
    assert runner.result() is None
    assert conn.closed


@pytest.mark.asyncio
async def test_send_msg_frame():
    conn = FakeConnection({"message_id": 3})
    adapter = WsAdapter(conn)
    async with running(adapter, conn):
        assert await adapter.send_msg(SendMsgParams(message="hi", group_id=100)) == SendMsgResult(message_id=3)
    frame = json.loads(conn.sent[0])
    assert (frame["action"], frame["params"]["message"]) == ("send_msg", "hi")


@pytest.mark.asyncio
async def test_call_timeout():
    conn = FakeConnection()
    adapter = WsAdapter(conn, call_timeout=0.05)
    async with running(adapter, conn):
        with pytest.raises(CallTimeoutError):
            await adapter.get_login_info()
        assert len(conn.sent) == 1


@pytest.mark.asyncio
async def test_event_dispatched_by_priority():
    conn = FakeConnection()
    adapter = WsAdapter(conn)
    order, seen_contexts = [], []
    done = asyncio.Event()

    def handler(name, result):
        async def handle(ctx):
            order.append(name)
            seen_contexts.append(ctx)
            return result

        return handle

    async def last(ctx):
        done.set()
        return True

    plugin = Plugin("p", "d")
    plugin.on("low", 0, Rule.on_message() & Rule.on_exact_match("#ping"), handler("low", True))
    plugin.on("high", 10, Rule.on_message(), handler("high", False))
    plugin.on("marker", -1, Rule.on_message(), last)
    plugin.on("done", 0, Rule.on_exact_match("#other"), last)
    async with running(adapter, conn, [plugin]):
        conn.push(event_frame("#ping"))
        conn.push(event_frame("#other"))
        await asyncio.wait_for(done.wait(), 1)
        assert order == ["high", "low", "high"]
        assert seen_contexts[0].caller is adapter
        assert seen_contexts[0].event.user_id == 42


@pytest.mark.asyncio
async def test_unknown_frames_are_ignored():
    conn = FakeConnection()
    adapter = WsAdapter(conn)
    done = asyncio.Event()

    async def handler(ctx):
        done.set()
        return True

    plugin = Plugin("p", "d")
    plugin.on("h", 0, Rule.on_message(), handler)
    async with running(adapter, conn, [plugin]) as runner:
        for frame in (b"\x00binary", "not json", json.dumps({"echo": 999, "data": None}), event_frame()):
            conn.push(frame)
        await asyncio.wait_for(done.wait(), 1)
        assert not runner.done()


@pytest.mark.asyncio
async def test_receive_error_propagates():
    conn = FakeConnection()
    runner = await start(WsAdapter(conn))
    conn.push(RuntimeError("boom"))
    with pytest.raises(RuntimeError, match="boom"):
        await asyncio.wait_for(runner, 1)
    assert conn.closed


@pytest.mark.asyncio
async def test_second_run_raises():
    conn = FakeConnection()
    adapter = WsAdapter(conn)
    async with running(adapter, conn):
        pass
    with pytest.raises(WebSocketError):
        await adapter.run([])