"""Quantifier matchers over collection items and mapping entries.

Item quantifiers defer per-item judgment to a nested matcher:

| Matcher   | Empty collection | Failure names                  |
|-----------|------------------|--------------------------------|
| AllItems  | matches          | first failing index and value  |
| SomeItems | does not match   | (no witness)                   |
| NoItems   | matches          | first matching index and value |

Entry quantifiers take either a Matcher, which receives the ``(key, value)``
tuple, or a callable ``(key, value) -> bool``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from minicrest._matcher import ConfigurationError, Matcher, require_matcher
from minicrest._types import EntryPredicate, Shape, shape_of

# ═══════════════════════════════════════════════════════════════════════════════
# Item quantifiers
# ═══════════════════════════════════════════════════════════════════════════════


def _not_a_collection(actual: Any) -> str:
    return f"expected a collection, but got {actual!r}"


def _indent(text: str) -> str:
    return "\n".join(f"  {line}" for line in text.splitlines())


@dataclass(frozen=True, slots=True)
class _ItemQuantifier(Matcher):
    item_matcher: Matcher

    def __post_init__(self) -> None:
        require_matcher(self.item_matcher, "item matcher")

    def _is_collection(self, actual: Any) -> bool:
        return shape_of(actual) is Shape.SEQUENCE

    def _first(self, actual: Iterable[Any], *, matching: bool) -> tuple[int, Any] | None:
        for index, item in enumerate(actual):
            if bool(self.item_matcher.matches(item)) is matching:
                return index, item
        return None

    def _item_text(self) -> str:
        return self.item_matcher.description()


@dataclass(frozen=True, slots=True)
class AllItems(_ItemQuantifier):
    def matches(self, actual: Any, /) -> bool:
        if not self._is_collection(actual):
            return False
        return all(self.item_matcher.matches(item) for item in actual)

    def description(self) -> str:
        return f"all items are {self._item_text()}"

    def failure_message(self, actual: Any, /) -> str:
        if not self._is_collection(actual):
            return _not_a_collection(actual)
        failing = self._first(actual, matching=False)
        if failing is None:
            return f"expected all items to be {self._item_text()}\nand they all matched"
        index, item = failing
        return (
            f"expected all items to be {self._item_text()}\n"
            f"item at index {index} failed:\n"
            f"{_indent(self.item_matcher.failure_message(item))}"
        )

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected not all items to be {self._item_text()}, but they all matched"


@dataclass(frozen=True, slots=True)
class SomeItems(_ItemQuantifier):
    def matches(self, actual: Any, /) -> bool:
        if not self._is_collection(actual):
            return False
        return any(self.item_matcher.matches(item) for item in actual)

    def description(self) -> str:
        return f"some items are {self._item_text()}"

    def failure_message(self, actual: Any, /) -> str:
        if not self._is_collection(actual):
            return _not_a_collection(actual)
        return f"expected some items to be {self._item_text()}\nbut no items matched"

    def negated_failure_message(self, actual: Any, /) -> str:
        if not self._is_collection(actual):
            return _not_a_collection(actual)
        return _unexpected_match(self, actual)


@dataclass(frozen=True, slots=True)
class NoItems(_ItemQuantifier):
    def matches(self, actual: Any, /) -> bool:
        if not self._is_collection(actual):
            return False
        return not any(self.item_matcher.matches(item) for item in actual)

    def description(self) -> str:
        return f"no items are {self._item_text()}"

    def failure_message(self, actual: Any, /) -> str:
        if not self._is_collection(actual):
            return _not_a_collection(actual)
        return _unexpected_match(self, actual)

    def negated_failure_message(self, actual: Any, /) -> str:
        if not self._is_collection(actual):
            return _not_a_collection(actual)
        return f"expected some items to be {self._item_text()}\nbut no items matched"


def _unexpected_match(quantifier: _ItemQuantifier, actual: Any) -> str:
    matching = quantifier._first(actual, matching=True)
    if matching is None:
        return f"expected no items to be {quantifier._item_text()}\nand none matched"
    index, item = matching
    return (
        f"expected no items to be {quantifier._item_text()}\n"
        f"but item at index {index} matched: {item!r}"
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Entry quantifiers
# ═══════════════════════════════════════════════════════════════════════════════


def _not_a_mapping(actual: Any) -> str:
    return f"expected a mapping, but got {actual!r}"


@dataclass(frozen=True, slots=True)
class _EntryQuantifier(Matcher):
    predicate: Matcher | EntryPredicate

    def __post_init__(self) -> None:
        if not isinstance(self.predicate, Matcher) and not callable(self.predicate):
            msg = (
                "entry predicate must be a Matcher or a callable (key, value) -> bool, "
                f"got {type(self.predicate).__name__}"
            )
            raise ConfigurationError(msg)

    def _entry_matches(self, key: Any, value: Any) -> bool:
        if isinstance(self.predicate, Matcher):
            return self.predicate.matches((key, value))
        return bool(self.predicate(key, value))

    def _first(self, actual: Mapping[Any, Any], *, matching: bool) -> tuple[Any, Any] | None:
        for key, value in actual.items():
            if bool(self._entry_matches(key, value)) is matching:
                return key, value
        return None

    def _condition(self) -> str:
        if isinstance(self.predicate, Matcher):
            return self.predicate.description()
        return "condition"


@dataclass(frozen=True, slots=True)
class AllEntries(_EntryQuantifier):
    def matches(self, actual: Any, /) -> bool:
        if not isinstance(actual, Mapping):
            return False
        return all(self._entry_matches(k, v) for k, v in actual.items())

    def description(self) -> str:
        return f"all entries match {self._condition()}"

    def failure_message(self, actual: Any, /) -> str:
        if not isinstance(actual, Mapping):
            return _not_a_mapping(actual)
        failing = self._first(actual, matching=False)
        if failing is None:
            return "expected all entries to match, and they all did"
        return f"expected all entries to match, but entry {failing!r} did not"

    def negated_failure_message(self, actual: Any, /) -> str:
        return "expected not all entries to match, but they all did"


@dataclass(frozen=True, slots=True)
class SomeEntry(_EntryQuantifier):
    def matches(self, actual: Any, /) -> bool:
        if not isinstance(actual, Mapping):
            return False
        return any(self._entry_matches(k, v) for k, v in actual.items())

    def description(self) -> str:
        return f"at least one entry matches {self._condition()}"

    def failure_message(self, actual: Any, /) -> str:
        if not isinstance(actual, Mapping):
            return _not_a_mapping(actual)
        return "expected at least one entry to match, but none did"

    def negated_failure_message(self, actual: Any, /) -> str:
        if not isinstance(actual, Mapping):
            return _not_a_mapping(actual)
        return _unexpected_entry(self, actual)


@dataclass(frozen=True, slots=True)
class NoEntry(_EntryQuantifier):
    def matches(self, actual: Any, /) -> bool:
        if not isinstance(actual, Mapping):
            return False
        return not any(self._entry_matches(k, v) for k, v in actual.items())

    def description(self) -> str:
        return f"no entries match {self._condition()}"

    def failure_message(self, actual: Any, /) -> str:
        if not isinstance(actual, Mapping):
            return _not_a_mapping(actual)
        return _unexpected_entry(self, actual)

    def negated_failure_message(self, actual: Any, /) -> str:
        if not isinstance(actual, Mapping):
            return _not_a_mapping(actual)
        return "expected some entries to match, but none did"


def _unexpected_entry(quantifier: _EntryQuantifier, actual: Mapping[Any, Any]) -> str:
    matching = quantifier._first(actual, matching=True)
    if matching is None:
        return "expected no entries to match, and none did"
    return f"expected no entries to match, but entry {matching!r} did"
