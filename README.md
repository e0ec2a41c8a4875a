# bocchi

bocchi is an asyncio client for the OneBot 11 protocol. It also includes a
ready-made chat bot built on that client.

The bot connects to a OneBot implementation over a WebSocket. It receives
events from the server and passes each one to the registered handlers, from
the highest priority to the lowest. Replies go back through the OneBot API.

## Installation

```
pip install .
```

To install what the test suite needs as well:

```
pip install ".[test]"
```

## Running the bot

```
bocchi
```

| Option       | Default               | Meaning                               |
|--------------|-----------------------|---------------------------------------|
| `--address`  | `ws://localhost:3001` | WebSocket address of the OneBot server |
| `--db`       | `./db.sqlite3`        | SQLite file that holds check-in points |
| `--food-dir` | `foods`               | directory of `.jpg` / `.png` pictures for `#wte` |

The bot logs at INFO level. It runs until the server closes the connection.

### Commands

| Command             | What it does                                                        |
|---------------------|---------------------------------------------------------------------|
| `#help`             | sends a forwarded message that lists every plugin and its handlers  |
| `#bonus`            | daily check-in that adds 1 to 100 random points, once per local day |
| `#my_bonus`         | shows your total points and the time of your last check-in          |
| `#echo <text>`      | sends the text back                                                 |
| `#select a / b / c` | replies with one of the choices, picked at random                   |
| `#hn`               | sends the top 10 Hacker News stories as a forwarded message         |
| `#wte`              | picks a random picture from the food directory and suggests that food |

Two plugins work on group messages without a command:

- **Repeat.** When two different members send the same message one after
  the other, the bot sends that message once. Only plain text and face
  messages are repeated.
- **Link details.** When a group message contains a bilibili video link, the
  bot replies with the video's cover, title, author and publication time.
  It recognises full `av…` and `BV…` links as well as `b23.tv` and
  `bili2233.cn` short links.

## Writing your own handlers

A handler is an async function. It receives a `bocchi.chain.Context`, which
has the attributes `caller`, `event` and `plugins`, and it returns a bool. If
a handler returns `True`, handlers of lower priority do not see the event.
If a handler raises, the error is logged and the chain continues.

Rules from `bocchi.rules` decide which events a handler receives. You can
combine them with `&` to build a `Matcher`.

```python
import asyncio

from bocchi.api import SendMsgParams
from bocchi.bot import Bot
from bocchi.message import Text
from bocchi.plugin import Plugin
from bocchi.plugins.echo import echo_plugin
from bocchi.rules import Rule


async def pong(ctx):
    await ctx.caller.send_msg(
        SendMsgParams(message=[Text(text="pong")], group_id=123456, auto_escape=True)
    )
    return True


async def run():
    bot = await Bot.connect("ws://localhost:3001")
    bot.use_builtin_handler()  # adds "#help"

    plugin = Plugin("Ping", "Answers #ping in one group")
    plugin.on("reply pong", 0, Rule.on_group_id(123456) & Rule.on_exact_match("#ping"), pong)
    bot.register_plugin(plugin)
    bot.register_plugin(echo_plugin())

    await bot.start()


asyncio.run(run())
```

The rules are:

- `Rule.on_message()`, `Rule.on_group_message()` and
  `Rule.on_private_message()` select events by kind.
- `Rule.on_sender_id(user_id)` and `Rule.on_group_id(group_id)` select
  events by sender or by group.
- `Rule.on_exact_match(text)`, `Rule.on_prefix(prefix)` and
  `Rule.on_suffix(suffix)` test the plain text of the message after
  surrounding whitespace is trimmed.

`Bot.on(...)` registers a handler on the bot's built-in plugin.
`Bot.register_plugin(plugin)` adds a whole `Plugin`. The handlers of all
plugins are sorted together by priority, highest first. Handlers with equal
priority keep the order in which they were registered.

## Events and messages

`bocchi.event` parses the events the server pushes. The event classes are
`GroupMessage`, `PrivateMessage`, `LifeCycle` and `HeartBeat`.

Message events have these members:

- `sender`
- `message`
- `user_id`
- `message_id`
- `nickname`
- `plain_text`, which joins the text segments of the message

Group messages also have `group_id`. If you read any of these members on an
event that does not carry it, `EventKindError` is raised.

`bocchi.message` defines one dataclass per OneBot segment type, for example
`Text`, `Face`, `Image`, `At`, `Reply` and `Node`. Message content is either a
string or a list of segments. To convert content to and from its wire form,
use `content_to_json` and `content_from_json`.

## Calling the API

`ctx.caller` is a `bocchi.caller.Caller`. It provides these methods:

- `get_login_info()`
- `send_private_msg`
- `send_group_msg`
- `send_msg`
- `delete_msg`
- `get_msg`
- `get_forward_msg`
- `set_msg_emoji_like`
- `send_forward_msg`

Every method except `get_login_info()` takes the matching parameter dataclass
from `bocchi.api`. For emoji reactions, the ids are available as members of
`bocchi.emoji.Emoji`. Names ending in `_1` are QQ faces and names ending in
`_2` are Unicode emoji.

The exceptions below live in `bocchi.errors`:

- `CallTimeoutError` is raised when a call gets no answer within five
  seconds (`WsAdapter.call_timeout`).
- `NotStartedError` is raised when a call is made before the bot has
  started.
- `ResponseTypeError` is raised when an answer has the wrong shape.

## Storage

`bocchi.storage.Database` keeps check-in points (`bocchi.models.Point`) and
chat histories (`bocchi.models.Memory`) in a single SQLite file. It can be
used as a context manager. `bocchi.storage.database(path)` returns a single
shared instance for each path.

## What is not included

- The bot has no AI chat plugin. `Memory` records and
  `CachedMessage.to_gpt_message()` exist and can be stored, but no plugin
  reads or writes them.
- Link details cover bilibili videos only.