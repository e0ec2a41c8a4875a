import pytest

from bocchi.chain import Context, MatchUnion, dispatch_event
from bocchi.errors import EventKindError
from bocchi.event import Event
from bocchi.rules import Matcher, Rule

META = {"time": 1, "self_id": 2, "post_type": "meta_event", "meta_event_type": "lifecycle", "sub_type": "connect"}


def context(text, caller=None, plugins=()):
    segments = [{"type": "text", "data": {"text": text}}]
    event = Event.from_dict(
        {**META, "post_type": "message", "message_type": "group", "sub_type": "normal", "message_id": 7,
         "group_id": 100, "user_id": 42, "message": segments, "raw_message": text, "font": 0,
         "sender": {"user_id": 42, "nickname": "bocchi"}}
    )
    return Context(caller, event, plugins)


def union(name, rule, result, log):
    async def handler(ctx):
        log.append((name, ctx.event.plain_text))
        if isinstance(result, Exception):
            raise result
        return result

    return MatchUnion(name, 0, Matcher([rule]), handler)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "specs, text, stopped_at, called",
    [
        ([("a", Rule.on_message(), True), ("b", Rule.on_message(), True)], "hi", 0, ["a"]),
        ([("a", Rule.on_message(), False), ("b", Rule.on_message(), False)], "x", None, ["a", "b"]),
        ([("a", Rule.on_prefix("#echo"), True), ("b", Rule.on_prefix("#sel"), True)], "#select a/b", 1, ["b"]),
        ([("broken", Rule.on_message(), RuntimeError("boom")), ("b", Rule.on_message(), True)], "x", 1,
         ["broken", "b"]),
    ],
)
async def test_dispatch_order(specs, text, stopped_at, called):
    log = []
    unions = [union(name, rule, result, log) for name, rule, result in specs]
    stopped = await dispatch_event(unions, context(text))
    assert stopped is (None if stopped_at is None else unions[stopped_at])
    assert log == [(name, text) for name in called]


@pytest.mark.asyncio
async def test_matcher_error_propagates():
    log = []
    unions = [union("a", Rule.on_prefix("#x"), True, log)]
    with pytest.raises(EventKindError):
        await dispatch_event(unions, Context(None, Event.from_dict(META), ()))
    assert log == []


@pytest.mark.asyncio
async def test_context_passed_through():
    seen = []
    marker = object()

    async def handler(ctx):
        seen.append(ctx)
        return True

    ctx = context("x", marker, ("p",))
    await dispatch_event([MatchUnion("a", 0, Matcher([Rule.on_message()]), handler)], ctx)
    assert seen == [ctx]
    assert seen[0].caller is marker