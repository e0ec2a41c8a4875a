"""Handler context, match unions and ordered event dispatch."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable, Iterable, Sequence

from bocchi.event import Event
from bocchi.rules import Matcher

if TYPE_CHECKING:
    from bocchi.caller import Caller
    from bocchi.plugin import Plugin

_log = logging.getLogger(__name__)

Handler = Callable[["Context"], Awaitable[bool]]


@dataclass(frozen=True)
class Context:
    """What a handler gets: the API caller, the event and all plugins."""

    caller: "Caller"
    event: Event
    plugins: Sequence["Plugin"]


@dataclass(frozen=True, eq=False)
class MatchUnion:
    """A handler together with the matcher that selects its events."""

    description: str
    priority: int
    matcher: Matcher
    handler: Handler

    async def _handle(self, context: Context) -> bool:
        try:
            return bool(await self.handler(context))
        except Exception:
            _log.exception("Failed to handle event with %s", self.description)
            return False


async def dispatch_event(match_unions: Iterable[MatchUnion], context: Context) -> MatchUnion | None:
    """Run matching handlers in order until one returns true; return that one.

    A handler that raises is logged and the chain goes on.
    """
    for union in match_unions:
        if union.matcher.is_match(context.event) and await union._handle(context):
            return union
    return None