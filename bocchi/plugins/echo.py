"""Echo back what follows "#echo"."""

from __future__ import annotations

from bocchi.api import SendMsgParams
from bocchi.chain import Context
from bocchi.event import GroupMessage
from bocchi.plugin import Plugin
from bocchi.rules import Rule

_COMMAND = "#echo"


def echo_text(text: str) -> str:
    """The text after every leading "#echo", stripped."""
    rest = text.strip()
    while rest.startswith(_COMMAND):
        rest = rest[len(_COMMAND):]
    return rest.strip()


async def _echo(ctx: Context) -> bool:
    event = ctx.event
    text = echo_text(event.plain_text)
    if text:
        group_id = event.group_id if isinstance(event, GroupMessage) else None
        await ctx.caller.send_msg(
            SendMsgParams(message=text, user_id=event.user_id, group_id=group_id, auto_escape=True)
        )
    return True


def echo_plugin() -> Plugin:
    plugin = Plugin("回显插件", "回显用户输入的文本")
    plugin.on("原样输出 echo 后的内容", 0, Rule.on_message() & Rule.on_prefix(_COMMAND), _echo)
    return plugin