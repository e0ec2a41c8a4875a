"""Top stories from Hacker News."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from bocchi.api import SendForwardMsgParams
from bocchi.chain import Context
from bocchi.message import Node
from bocchi.net import http_client
from bocchi.plugin import Plugin
from bocchi.rules import Rule

logger = logging.getLogger(__name__)

API_BASE = "https://hacker-news.firebaseio.com/v0"
TOP_STORIES_URL = f"{API_BASE}/topstories.json"
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class HackerStory:
    id: int
    title: str
    url: str

    @classmethod
    def from_dict(cls, data: Any) -> "HackerStory":
        if not isinstance(data, dict):
            raise ValueError(f"not a story: {data!r}")
        story_id, title, url = data.get("id"), data.get("title"), data.get("url")
        if not isinstance(story_id, int) or not isinstance(title, str) or not isinstance(url, str):
            raise ValueError(f"not a story: {data!r}")
        return cls(id=story_id, title=title, url=url)

    def __str__(self) -> str:
        return (
            f"标题: {self.title}\n链接：{self.url}\n"
            f"评论：https://news.ycombinator.com/item?id={self.id}"
        )


async def _fetch_story(client: httpx.AsyncClient, story_id: int) -> HackerStory:
    response = await client.get(f"{API_BASE}/item/{story_id}.json")
    response.raise_for_status()
    return HackerStory.from_dict(response.json())


async def fetch_top_stories(client: httpx.AsyncClient, limit: int = DEFAULT_LIMIT) -> list[HackerStory]:
    """The first stories of the top list, in order; stories that fail to load are skipped."""
    response = await client.get(TOP_STORIES_URL)
    response.raise_for_status()
    ids = response.json()
    if not isinstance(ids, list):
        raise ValueError(f"unexpected top stories: {ids!r}")
    results = await asyncio.gather(
        *(_fetch_story(client, story_id) for story_id in ids[:limit]), return_exceptions=True
    )
    stories = []
    for result in results:
        if isinstance(result, HackerStory):
            stories.append(result)
        elif isinstance(result, Exception):
            logger.error("获取 Hacker News 内容失败：%s", result)
        else:
            raise result
    return stories


def hacker_news_plugin(client: httpx.AsyncClient | None = None) -> Plugin:
    plugin = Plugin("Hacker News 插件", "获取 Hacker News 的内容")

    async def top_ten(ctx: Context) -> bool:
        stories = await fetch_top_stories(client or http_client(), DEFAULT_LIMIT)
        text = "好的，如下是 Hacker News top 10 的内容：" + "".join(f"\n\n{story}" for story in stories)
        await ctx.caller.send_forward_msg(
            SendForwardMsgParams(
                message=[Node(content=text)],
                user_id=getattr(ctx.event, "user_id", None),
                group_id=getattr(ctx.event, "group_id", None),
            )
        )
        return True

    plugin.on("输出 Hacker News top 10", 0, Rule.on_message() & Rule.on_exact_match("#hn"), top_ten)
    return plugin