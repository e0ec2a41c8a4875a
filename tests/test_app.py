import httpx
import pytest

from bocchi.api import ApiResponse, SendMsgResult
from bocchi.app import build_plugins, main
from bocchi.caller import Caller
from bocchi.chain import Context
from bocchi.event import PrivateMessage, Sender
from bocchi.message import Text
from bocchi.storage import Database


class RecordingCaller(Caller):
    def __init__(self):
        self.requests = []

    async def call(self, request):
        self.requests.append(request)
        return ApiResponse(echo=request.echo, data=SendMsgResult(message_id=1))


def private_event(text):
    return PrivateMessage(
        time=0, self_id=1, post_type="message", message_type="private", sub_type="friend",
        message_id=3, user_id=42, message=[Text(text=text)], raw_message=text, font=0,
        sender=Sender(user_id=42, nickname="n"),
    )


@pytest.mark.asyncio
async def test_build_plugins_order(tmp_path):
    with Database(tmp_path / "db.sqlite3") as db:
        async with httpx.AsyncClient() as client:
            plugins = build_plugins(db, client, tmp_path)
    assert [plugin.name for plugin in plugins] == [
        "每日签到插件",
        "回显插件",
        "复读插件",
        "Hacker News 插件",
        "随机食物插件",
        "链接解析插件",
        "随机选择插件",
    ]


@pytest.mark.asyncio
async def test_food_dir_reaches_plugin(tmp_path):
    (tmp_path / "ramen.jpg").write_bytes(b"x")
    caller = RecordingCaller()
    with Database(tmp_path / "db.sqlite3") as db:
        async with httpx.AsyncClient() as client:
            plugins = build_plugins(db, client, tmp_path)
    food = next(plugin for plugin in plugins if plugin.name == "随机食物插件")
    event = private_event("#wte")
    await food.match_unions[0].handler(Context(caller=caller, event=event, plugins=plugins))
    assert caller.requests[0].params.message[1] == Text(text="今天吃ramen！")


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit) as info:
        main(["--bogus"])
    assert info.value.code == 2


def test_main_fails_without_server(tmp_path):
    with pytest.raises(OSError):
        main(["--address", "ws://127.0.0.1:1", "--db", str(tmp_path / "db.sqlite3")])