"""Plugins: named groups of handlers."""

from __future__ import annotations

from dataclasses import dataclass, field

from bocchi.chain import Handler, MatchUnion
from bocchi.rules import Matcher, Rule


@dataclass
class Plugin:
    """A named, described set of handlers."""

    name: str
    description: str
    _match_unions: list[MatchUnion] = field(default_factory=list, init=False, repr=False)

    def on(self, description: str, priority: int, matcher: Matcher | Rule, handler: Handler) -> None:
        """Register a handler run for events the matcher accepts."""
        if isinstance(matcher, Rule):
            matcher = Matcher([matcher])
        elif not isinstance(matcher, Matcher):
            raise TypeError(f"expected a Rule or Matcher, got {type(matcher).__name__}")
        self._match_unions.append(MatchUnion(str(description), int(priority), matcher, handler))

    @property
    def match_unions(self) -> tuple[MatchUnion, ...]:
        return tuple(self._match_unions)