"""Repeat a group message once enough different members have sent it in a row."""

from __future__ import annotations

from dataclasses import dataclass, field

from bocchi.api import SendMsgParams
from bocchi.chain import Context
from bocchi.message import Face, MessageContent, Text
from bocchi.plugin import Plugin
from bocchi.rules import Rule

THRESHOLD = 2
REPEAT_PRIORITY = -(2**31)


@dataclass
class _Streak:
    message: MessageContent | None
    users: set[int] = field(default_factory=set)
    repeated: bool = False


def _repeatable(message: MessageContent) -> MessageContent | None:
    if isinstance(message, str):
        return message
    if all(isinstance(segment, (Text, Face)) for segment in message):
        return list(message)
    return None


class RepeatTracker:
    """Tracks the current run of identical messages in each group."""

    def __init__(self, threshold: int = THRESHOLD) -> None:
        if threshold < 2:
            raise ValueError("threshold must be greater than 1")
        self.threshold = threshold
        self._groups: dict[int, _Streak] = {}

    def observe(self, group_id: int, user_id: int, message: MessageContent) -> MessageContent | None:
        """Record a message; return it when it is time to repeat it, else None."""
        content = _repeatable(message)
        streak = self._groups.get(group_id)
        if streak is None or streak.message != content:
            self._groups[group_id] = _Streak(content, {user_id})
            return None
        if streak.repeated:
            return None
        streak.users.add(user_id)
        if len(streak.users) < self.threshold:
            return None
        streak.users.clear()
        streak.repeated = True
        return streak.message


def repeat_plugin() -> Plugin:
    plugin = Plugin("复读插件", f"连续文本达到 {THRESHOLD} 次时自动复读")
    tracker = RepeatTracker()

    async def repeat(ctx: Context) -> bool:
        group_id = ctx.event.group_id
        message = tracker.observe(group_id, ctx.event.user_id, ctx.event.message)
        if message is not None:
            await ctx.caller.send_msg(
                SendMsgParams(message=message, user_id=None, group_id=group_id, auto_escape=True)
            )
        return False

    # Lowest priority so that commands are never repeated.
    plugin.on(f"检测是否满足连续 {THRESHOLD} 条消息", REPEAT_PRIORITY, Rule.on_group_message(), repeat)
    return plugin