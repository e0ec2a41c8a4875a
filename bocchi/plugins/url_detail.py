"""Show details of links found in group messages."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

import httpx

from bocchi.api import SendMsgParams
from bocchi.chain import Context
from bocchi.message import MessageContent
from bocchi.net import http_client
from bocchi.plugin import Plugin
from bocchi.plugins import bilibili
from bocchi.rules import Rule

logger = logging.getLogger(__name__)

Recognizer = Callable[[httpx.AsyncClient, str, int], Awaitable["MessageContent | None"]]

RECOGNIZERS: tuple[Recognizer, ...] = (bilibili.recognizer,)


def url_detail_plugin(client: httpx.AsyncClient | None = None) -> Plugin:
    plugin = Plugin("链接解析插件", "解析消息中的链接，展示详情")

    async def detect(ctx: Context) -> bool:
        text, message_id = ctx.event.plain_text, ctx.event.message_id
        http = client or http_client()
        tasks = [asyncio.create_task(recognize(http, text, message_id)) for recognize in RECOGNIZERS]
        try:
            for finished in asyncio.as_completed(tasks):
                message = await finished
                if message is None:
                    continue
                try:
                    await ctx.caller.send_msg(
                        SendMsgParams(
                            message=message,
                            user_id=getattr(ctx.event, "user_id", None),
                            group_id=getattr(ctx.event, "group_id", None),
                            auto_escape=True,
                        )
                    )
                except Exception as error:
                    logger.error("获取消息成功但发送失败: %r", error)
                # A message is taken to hold one kind of link only.
                break
        finally:
            for task in tasks:
                task.cancel()
        return False

    # Higher than the default so it runs first; it never stops the chain.
    plugin.on("识别消息中是否包含可解析详情的链接", 1, Rule.on_group_message(), detect)
    return plugin