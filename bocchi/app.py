"""Command-line entry point that runs the bot with its plugins."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Sequence

import httpx

from bocchi.bot import Bot
from bocchi.net import HTTP_TIMEOUT
from bocchi.plugin import Plugin
from bocchi.plugins.bonus import bonus_plugin
from bocchi.plugins.echo import echo_plugin
from bocchi.plugins.hacker_news import hacker_news_plugin
from bocchi.plugins.repeat import repeat_plugin
from bocchi.plugins.select import select_plugin
from bocchi.plugins.url_detail import url_detail_plugin
from bocchi.plugins.what_to_eat import DEFAULT_FOOD_DIR, PathLike, what_to_eat_plugin
from bocchi.storage import DEFAULT_PATH, Database, database

DEFAULT_ADDRESS = "ws://localhost:3001"


def build_plugins(db: Database, client: httpx.AsyncClient, food_dir: PathLike) -> list[Plugin]:
    """The bot's plugins, in registration order."""
    return [
        bonus_plugin(db),
        echo_plugin(),
        repeat_plugin(),
        hacker_news_plugin(client),
        what_to_eat_plugin(food_dir),
        url_detail_plugin(client),
        select_plugin(),
    ]


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bocchi", description="Run the OneBot 11 bot.")
    parser.add_argument("--address", default=DEFAULT_ADDRESS, help="WebSocket address of the OneBot server")
    parser.add_argument("--db", default=DEFAULT_PATH, help="path of the database file")
    parser.add_argument("--food-dir", default=str(DEFAULT_FOOD_DIR), help="directory of food pictures")
    return parser


async def _serve(args: argparse.Namespace) -> None:
    bot = await Bot.connect(args.address)
    bot.use_builtin_handler()
    db = database(args.db)
    try:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT, follow_redirects=True) as client:
            for plugin in build_plugins(db, client, args.food_dir):
                bot.register_plugin(plugin)
            await bot.start()
    finally:
        db.close()


def main(argv: Sequence[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(_serve(args))
    return 0