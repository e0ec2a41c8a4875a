import httpx
import pytest

from bocchi.api import ApiResponse, SendMsgResult
from bocchi.caller import Caller
from bocchi.chain import Context
from bocchi.event import GroupMessage, Sender
from bocchi.message import Node, Text
from bocchi.plugins.hacker_news import HackerStory, fetch_top_stories, hacker_news_plugin


class RecordingCaller(Caller):
    def __init__(self):
        self.requests = []

    async def call(self, request):
        self.requests.append(request)
        return ApiResponse(echo=request.echo, data=SendMsgResult(message_id=1))


def group_event(text):
    return GroupMessage(
        time=0, self_id=1, post_type="message", message_type="group", sub_type="normal",
        message_id=7, group_id=99, user_id=42, anonymous=None, message=[Text(text=text)],
        raw_message=text, font=0, sender=Sender(user_id=42, nickname="n"),
    )


def make_transport(failing=(), top_status=200):
    def handler(request):
        path = request.url.path
        if path.endswith("topstories.json"):
            return httpx.Response(top_status, json=list(range(1, 16)))
        story_id = int(path.rsplit("/", 1)[-1].split(".")[0])
        if story_id in failing:
            return httpx.Response(500)
        return httpx.Response(
            200, json={"id": story_id, "title": f"t{story_id}", "url": f"https://example.com/{story_id}"}
        )

    return httpx.MockTransport(handler)


def test_story_str():
    story = HackerStory(id=1, title="T", url="https://example.com")
    assert str(story) == "标题: T\n链接：https://example.com\n评论：https://news.ycombinator.com/item?id=1"


def test_story_from_dict_rejects_missing_url():
    with pytest.raises(ValueError):
        HackerStory.from_dict({"id": 1, "title": "Ask HN"})


@pytest.mark.asyncio
async def test_fetch_keeps_order_and_limit():
    async with httpx.AsyncClient(transport=make_transport()) as client:
        stories = await fetch_top_stories(client, 10)
    assert [story.id for story in stories] == list(range(1, 11))
    assert all(story.title == f"t{story.id}" for story in stories)


@pytest.mark.asyncio
async def test_fetch_skips_failed_stories():
    async with httpx.AsyncClient(transport=make_transport(failing={3, 5})) as client:
        stories = await fetch_top_stories(client, 6)
    assert [story.id for story in stories] == [1, 2, 4, 6]


@pytest.mark.asyncio
async def test_fetch_raises_when_top_list_fails():
    async with httpx.AsyncClient(transport=make_transport(top_status=503)) as client:
        with pytest.raises(httpx.HTTPStatusError):
            await fetch_top_stories(client)


@pytest.mark.asyncio
async def test_plugin_sends_forward_message():
    caller = RecordingCaller()
    async with httpx.AsyncClient(transport=make_transport()) as client:
        plugin = hacker_news_plugin(client)
        union = plugin.match_unions[0]
        event = group_event("#hn")
        assert union.matcher.is_match(event)
        assert await union.handler(Context(caller=caller, event=event, plugins=(plugin,))) is True
    request = caller.requests[0]
    assert request.action.value == "send_forward_msg"
    node = request.params.message[0]
    assert isinstance(node, Node)
    assert node.content.startswith("好的，如下是 Hacker News top 10 的内容：")
    assert node.content.count("标题: ") == 10
    assert request.params.group_id == 99