"""Rules that decide whether an event is handled, and matchers that combine them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable

from bocchi.event import Event, GroupMessage, PrivateMessage

Predicate = Callable[[Event], bool]


@dataclass(frozen=True, eq=False)
class Rule:
    """A named predicate over events."""

    name: str
    predicate: Predicate = field(repr=False)

    def __str__(self) -> str:
        return self.name

    def is_match(self, event: Event) -> bool:
        return bool(self.predicate(event))

    def __and__(self, other: object) -> "Matcher":
        if isinstance(other, Rule):
            return Matcher([self, other])
        if isinstance(other, Matcher):
            return Matcher([self, *other.condition])
        return NotImplemented

    @staticmethod
    def on_message() -> "Rule":
        return Rule("on_message", lambda event: isinstance(event, (GroupMessage, PrivateMessage)))

    @staticmethod
    def on_group_message() -> "Rule":
        return Rule("on_group_message", lambda event: isinstance(event, GroupMessage))

    @staticmethod
    def on_private_message() -> "Rule":
        return Rule("on_private_message", lambda event: isinstance(event, PrivateMessage))

    @staticmethod
    def on_sender_id(user_id: int) -> "Rule":
        return Rule(f"on_sender_id({user_id})", lambda event: event.sender.user_id == user_id)

    @staticmethod
    def on_group_id(group_id: int) -> "Rule":
        return Rule(
            f"on_group_id({group_id})",
            lambda event: isinstance(event, GroupMessage) and event.group_id == group_id,
        )

    @staticmethod
    def _on_text(name: str, check: Callable[[str], bool]) -> "Rule":
        return Rule(name, lambda event: check(event.plain_text.strip()))

    @staticmethod
    def on_exact_match(text: str) -> "Rule":
        target = text.strip()
        return Rule._on_text(f"on_exact_match({text})", lambda plain: plain == target)

    @staticmethod
    def on_prefix(prefix: str) -> "Rule":
        target = prefix.strip()
        return Rule._on_text(f"on_prefix({prefix})", lambda plain: plain.startswith(target))

    @staticmethod
    def on_suffix(suffix: str) -> "Rule":
        target = suffix.strip()
        return Rule._on_text(f"on_suffix({suffix})", lambda plain: plain.endswith(target))


@dataclass
class Matcher:
    """A conjunction of rules; an event matches when every rule does."""

    condition: list[Rule] = field(default_factory=list)

    def __str__(self) -> str:
        return " & ".join(rule.name for rule in self.condition)

    def add(self, rules: Iterable[Rule]) -> None:
        self.condition.extend(rules)

    def is_match(self, event: Event) -> bool:
        return all(rule.is_match(event) for rule in self.condition)

    def __and__(self, other: object) -> "Matcher":
        if isinstance(other, Matcher):
            return Matcher([*self.condition, *other.condition])
        if isinstance(other, Rule):
            return Matcher([*self.condition, other])
        return NotImplemented