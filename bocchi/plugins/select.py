"""Pick one of several choices at random."""

from __future__ import annotations

import random

from bocchi.api import SendMsgParams
from bocchi.chain import Context
from bocchi.message import Reply, Text
from bocchi.plugin import Plugin
from bocchi.rules import Rule

_COMMAND = "#select"


def parse_choices(text: str) -> list[str]:
    """The non-empty, stripped choices separated by "/" after "#select"."""
    rest = text.strip()
    while rest.startswith(_COMMAND):
        rest = rest[len(_COMMAND):]
    return [choice for choice in (part.strip() for part in rest.split("/")) if choice]


def select_plugin() -> Plugin:
    plugin = Plugin("随机选择插件", "解决选择困难症")

    async def select(ctx: Context) -> bool:
        choices = parse_choices(ctx.event.plain_text)
        if choices:
            event = ctx.event
            await ctx.caller.send_msg(
                SendMsgParams(
                    message=[Reply(id=str(event.message_id)), Text(text=random.choice(choices))],
                    user_id=getattr(event, "user_id", None),
                    group_id=getattr(event, "group_id", None),
                    auto_escape=True,
                )
            )
        return True

    plugin.on("随机选择", 0, Rule.on_message() & Rule.on_prefix(_COMMAND), select)
    return plugin