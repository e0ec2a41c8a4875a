"""The bot: a connection to the server plus the plugins it serves."""

from __future__ import annotations

from typing import Any, Iterable, Protocol

from bocchi.api import SendForwardMsgParams
from bocchi.chain import Context, Handler
from bocchi.message import Node
from bocchi.plugin import Plugin
from bocchi.rules import Matcher, Rule
from bocchi.ws import WsAdapter

BUILTIN_PLUGIN_NAME = "内建插件"
BUILTIN_PLUGIN_DESCRIPTION = "直接注册在 Bot 上的插件"
HELP_PRIORITY = 2**31 - 1
_HELP_HEADER = "机器人波奇酱！目前由如下插件提供服务：\n"


class _Adapter(Protocol):
    async def run(self, plugins: Iterable[Plugin]) -> None: ...


def help_text(plugins: Iterable[Plugin]) -> str:
    """Describe every plugin and every handler it registers."""
    parts = [_HELP_HEADER]
    for plugin in plugins:
        parts.append(f"\n  {plugin.name} - {plugin.description}\n")
        parts.extend(f"    {union.matcher} - {union.description}\n" for union in plugin.match_unions)
    return "".join(parts)


class Bot:
    """Holds the adapter and the plugins; handlers registered directly go to a built-in plugin."""

    def __init__(self, adapter: _Adapter | Any) -> None:
        self.adapter = adapter
        self.plugins: list[Plugin] = [Plugin(BUILTIN_PLUGIN_NAME, BUILTIN_PLUGIN_DESCRIPTION)]

    @classmethod
    async def connect(cls, address: str) -> "Bot":
        """Connect to a OneBot WebSocket server."""
        return cls(await WsAdapter.connect(address))

    def on(self, description: str, priority: int, matcher: Matcher | Rule, handler: Handler) -> None:
        """Register a handler on the built-in plugin."""
        self.plugins[0].on(description, priority, matcher, handler)

    def register_plugin(self, plugin: Plugin) -> None:
        self.plugins.append(plugin)

    async def start(self) -> None:
        """Serve events until the connection ends."""
        await self.adapter.run(self.plugins)

    def use_builtin_handler(self) -> None:
        """Answer "#help" with a forwarded message describing all plugins."""

        async def show_help(ctx: Context) -> bool:
            await ctx.caller.send_forward_msg(
                SendForwardMsgParams(
                    message=[Node(content=help_text(ctx.plugins))],
                    user_id=getattr(ctx.event, "user_id", None),
                    group_id=getattr(ctx.event, "group_id", None),
                )
            )
            return True

        self.on(
            "显示帮助信息",
            HELP_PRIORITY,
            Rule.on_message() & Rule.on_exact_match("#help"),
            show_help,
        )