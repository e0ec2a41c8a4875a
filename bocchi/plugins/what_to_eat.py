"""Suggest a random food, with its picture."""

from __future__ import annotations

import asyncio
import base64
import os
import random
from pathlib import Path
from typing import Union

from bocchi.api import SendMsgParams
from bocchi.chain import Context
from bocchi.message import Image, MessageSegment, Reply, Text
from bocchi.plugin import Plugin
from bocchi.rules import Rule

DEFAULT_FOOD_DIR = Path("foods")
IMAGE_SUFFIXES = (".jpg", ".png")

PathLike = Union[str, "os.PathLike[str]"]


def list_foods(food_dir: PathLike) -> list[Path]:
    """The pictures in the directory, sorted; raises OSError if it cannot be read."""
    return sorted(entry for entry in Path(food_dir).iterdir() if entry.name.endswith(IMAGE_SUFFIXES))


def pick_food(food_dir: PathLike) -> tuple[str, bytes]:
    """A random food's name and picture; raises LookupError if there is none."""
    foods = list_foods(food_dir)
    if not foods:
        raise LookupError("没有食物")
    food = random.choice(foods)
    return food.name.rsplit(".", 1)[0], food.read_bytes()


def what_to_eat_plugin(food_dir: PathLike = DEFAULT_FOOD_DIR) -> Plugin:
    plugin = Plugin("随机食物插件", "想想今天吃什么？")

    async def suggest(ctx: Context) -> bool:
        reply = Reply(id=str(ctx.event.message_id))
        message: list[MessageSegment]
        try:
            name, picture = await asyncio.to_thread(pick_food, food_dir)
        except (OSError, LookupError):
            message = [reply, Text(text="出错啦，请稍后再试")]
        else:
            encoded = base64.b64encode(picture).decode("ascii")
            message = [reply, Text(text=f"今天吃{name}！"), Image(file=f"base64://{encoded}", cache=True)]
        await ctx.caller.send_msg(
            SendMsgParams(
                message=message,
                user_id=getattr(ctx.event, "user_id", None),
                group_id=getattr(ctx.event, "group_id", None),
                auto_escape=True,
            )
        )
        return True

    plugin.on("随机推荐食物", 0, Rule.on_message() & Rule.on_exact_match("#wte"), suggest)
    return plugin