"""Details of bilibili videos linked in a message."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

import httpx

from bocchi.message import Image, MessageContent, Reply, Text

REQUEST_TIMEOUT = 10.0
VIEW_API = "https://api.bilibili.com/x/web-interface/view"

_AV_RE = re.compile(r"https?://(?:www\.)?bilibili\.com/video/av(\d+)")
_BV_RE = re.compile(r"https?://(?:www\.)?bilibili\.com/video/(BV[a-zA-Z0-9_-]{10})")
_SHORT_URL_RES = (
    re.compile(r"https?://(?:www\.)?b23\.tv/[a-zA-Z0-9_-]{7}"),
    re.compile(r"https?://(?:www\.)?bili2233\.cn/[a-zA-Z0-9_-]{7}"),
)


class VideoKind(Enum):
    AV = "av"
    BV = "bv"


@dataclass(frozen=True)
class VideoID:
    kind: VideoKind
    value: str

    @classmethod
    def av(cls, value: str) -> "VideoID":
        return cls(VideoKind.AV, value)

    @classmethod
    def bv(cls, value: str) -> "VideoID":
        return cls(VideoKind.BV, value)

    @property
    def query(self) -> dict[str, str]:
        return {"aid": self.value} if self.kind is VideoKind.AV else {"bvid": self.value}


def parse_raw_video_id(text: str) -> VideoID | None:
    """Find a full video link in the text; av links are looked for first."""
    match = _AV_RE.search(text)
    if match:
        return VideoID.av(match.group(1))
    match = _BV_RE.search(text)
    if match:
        return VideoID.bv(match.group(1))
    return None


def parse_short_url(text: str) -> str | None:
    """Find a short link in the text."""
    for pattern in _SHORT_URL_RES:
        match = pattern.search(text)
        if match:
            return match.group(0)
    return None


async def parse_video_id(client: httpx.AsyncClient, text: str) -> VideoID | None:
    """Find a video id in the text, following a short link if needed."""
    found = parse_raw_video_id(text)
    if found is not None:
        return found
    url = parse_short_url(text)
    if url is None:
        return None
    try:
        response = await client.get(url, timeout=REQUEST_TIMEOUT, follow_redirects=True)
    except httpx.HTTPError:
        return None
    return parse_raw_video_id(str(response.url))


def _format_local(timestamp: int) -> str:
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc).astimezone()
    total = int((moment.utcoffset() or timedelta(0)).total_seconds()) // 60
    sign = "+" if total >= 0 else "-"
    hours, minutes = divmod(abs(total), 60)
    return f"{moment:%Y-%m-%d %H:%M:%S} {sign}{hours:02}:{minutes:02}"


def _detail(data: Any) -> tuple[str, str, int, str] | None:
    if not isinstance(data, dict):
        return None
    title, pic, pubdate, owner = data.get("title"), data.get("pic"), data.get("pubdate"), data.get("owner")
    name = owner.get("name") if isinstance(owner, dict) else None
    if not (isinstance(title, str) and isinstance(pic, str) and isinstance(name, str)):
        return None
    if not isinstance(pubdate, int) or isinstance(pubdate, bool):
        return None
    return title, pic, pubdate, name


async def recognizer(client: httpx.AsyncClient, text: str, message_id: int) -> MessageContent | None:
    """A reply describing the linked video, or None if there is none or it cannot be fetched."""
    video_id = await parse_video_id(client, text)
    if video_id is None:
        return None
    try:
        response = await client.get(VIEW_API, params=video_id.query, timeout=REQUEST_TIMEOUT)
        body = response.json()
    except (httpx.HTTPError, ValueError):
        return None
    detail = _detail(body.get("data") if isinstance(body, dict) else None)
    if detail is None:
        return None
    title, pic, pubdate, owner = detail
    try:
        published = _format_local(pubdate)
    except (OverflowError, OSError, ValueError):
        return None
    return [
        Reply(id=str(message_id)),
        Image(file=pic, cache=True, proxy=False, timeout=10),
        Text(text=f"标题：{title}\n作者：{owner}\n发布时间：{published}"),
    ]