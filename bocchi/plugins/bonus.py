"""Daily check-in for points."""

from __future__ import annotations

import random
from datetime import datetime

from bocchi.api import SendMsgParams
from bocchi.chain import Context
from bocchi.message import Reply, Text
from bocchi.models import Point
from bocchi.plugin import Plugin
from bocchi.rules import Rule
from bocchi.storage import Database

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
MIN_BONUS = 1
MAX_BONUS = 100


def check_in(db: Database, user_id: int, nickname: str) -> tuple[int, Point]:
    """Check a user in; return the points gained (0 if already checked in today) and the record."""
    point = db.get_point(user_id) or Point.fresh(user_id, nickname)
    now = datetime.now().astimezone()
    if point.last_update.astimezone().date() == now.date():
        return 0, point
    gained = random.randint(MIN_BONUS, MAX_BONUS)
    point.point += gained
    point.name = nickname
    point.last_update = now
    db.save_point(point)
    return gained, point


def _check_in_text(gained: int, point: Point) -> str:
    if gained == 0:
        return "今天已经签到过了，请明天再来～"
    return (
        f"本次签到积分：{gained}\n当前总积分：{point.point}\n"
        f"最后签到时间：{point.last_update.strftime(TIME_FORMAT)}"
    )


def bonus_message(db: Database, user_id: int) -> str:
    """Describe a user's points, or invite a first check-in."""
    point = db.get_point(user_id)
    if point is None:
        return "你还没有签到过哦，发送 #bonus 进行第一次签到吧！"
    return f"当前总积分：{point.point}\n最后签到时间：{point.last_update.strftime(TIME_FORMAT)}"


async def _reply(ctx: Context, text: str) -> None:
    event = ctx.event
    await ctx.caller.send_msg(
        SendMsgParams(
            message=[Reply(id=str(event.message_id)), Text(text=text)],
            user_id=event.user_id,
            group_id=getattr(event, "group_id", None),
            auto_escape=True,
        )
    )


def bonus_plugin(db: Database) -> Plugin:
    plugin = Plugin("每日签到插件", "每日签到获取积分")

    async def daily(ctx: Context) -> bool:
        gained, point = check_in(db, ctx.event.user_id, ctx.event.nickname)
        await _reply(ctx, _check_in_text(gained, point))
        return True

    async def query(ctx: Context) -> bool:
        await _reply(ctx, bonus_message(db, ctx.event.user_id))
        return True

    plugin.on("每日签到", 0, Rule.on_message() & Rule.on_exact_match("#bonus"), daily)
    plugin.on("查询个人签到分数", 0, Rule.on_message() & Rule.on_exact_match("#my_bonus"), query)
    return plugin