"""Collection matchers: size, membership and content.

Matchers that accept several kinds of actual value dispatch on
``shape_of(actual)`` with one branch per Shape tag. Unsupported shapes
evaluate to False rather than raising.
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from minicrest._matcher import ConfigurationError, Matcher
from minicrest._types import (
    Shape,
    contains_value,
    multiset_difference,
    shape_of,
    values_equal,
)


def _join(items: Any) -> str:
    return ", ".join(repr(item) for item in items)


def _size_of(actual: Any) -> int | None:
    try:
        return len(actual)
    except TypeError:
        return None


def _single_mapping(items: tuple[Any, ...]) -> Mapping[Any, Any] | None:
    if len(items) == 1 and isinstance(items[0], Mapping):
        return items[0]
    return None


def _pairs_missing(expected: Mapping[Any, Any], actual: Mapping[Any, Any]) -> dict[Any, Any]:
    """Pairs of ``expected`` whose key is absent from, or differs in, ``actual``."""
    return {
        k: v for k, v in expected.items() if k not in actual or not values_equal(actual[k], v)
    }


@dataclass(frozen=True, slots=True)
class Empty(Matcher):
    """Zero length. Values without a length never match."""

    def matches(self, actual: Any, /) -> bool:
        return _size_of(actual) == 0

    def description(self) -> str:
        return "empty"

    def failure_message(self, actual: Any, /) -> str:
        size = _size_of(actual)
        if size is None:
            return f"expected {actual!r} to be empty, but it has no size"
        return f"expected {actual!r} to be empty, but had size {size}"

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} not to be empty, but it was"


@dataclass(frozen=True, slots=True)
class HasSize(Matcher):
    """Length equals an integer, or satisfies a nested matcher.

    >>> from minicrest import has_size, is_greater_than
    >>> has_size(is_greater_than(2)).matches([1, 2, 3])
    True
    """

    expected: int | Matcher

    def matches(self, actual: Any, /) -> bool:
        size = _size_of(actual)
        if size is None:
            return False
        if isinstance(self.expected, Matcher):
            return self.expected.matches(size)
        return values_equal(size, self.expected)

    def description(self) -> str:
        return f"has size {self._expected_text()}"

    def failure_message(self, actual: Any, /) -> str:
        size = _size_of(actual)
        if size is None:
            return f"expected {actual!r} to have size {self._expected_text()}, but it has no size"
        return f"expected {actual!r} to have size {self._expected_text()}, but had size {size}"

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} not to have size {self._expected_text()}, but it did"

    def _expected_text(self) -> str:
        if isinstance(self.expected, Matcher):
            return self.expected.description()
        return str(self.expected)


@dataclass(frozen=True, slots=True, init=False)
class Includes(Matcher):
    """Partial containment.

    - string actual: every item is a substring
    - sequence actual: every item is an element
    - mapping actual: a single mapping argument is a subset of key/value
      pairs; otherwise every item is a key (mapping items are pair subsets)
    """

    items: tuple[Any, ...]

    def __init__(self, *items: Any) -> None:
        if not items:
            msg = "includes requires at least one item"
            raise ConfigurationError(msg)
        object.__setattr__(self, "items", items)

    def matches(self, actual: Any, /) -> bool:
        missing = self._missing(actual)
        return missing is not None and not missing

    def description(self) -> str:
        return f"includes {self._expected_text()}"

    def failure_message(self, actual: Any, /) -> str:
        message = f"expected {actual!r} to include {self._expected_text()}"
        missing = self._missing(actual)
        if missing is None:
            return f"{message}\nbut it cannot contain items"
        if not missing:
            return message
        if isinstance(missing, Mapping):
            return f"{message}\nmissing: {missing!r}"
        return f"{message}\nmissing: {_join(missing)}"

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} not to include {self._expected_text()}, but it did"

    def _expected_text(self) -> str:
        expected_pairs = _single_mapping(self.items)
        if expected_pairs is not None:
            return repr(expected_pairs)
        return _join(self.items)

    def _missing(self, actual: Any) -> list[Any] | dict[Any, Any] | None:
        """Items not found in ``actual``; None if ``actual`` cannot hold items."""
        match shape_of(actual):
            case Shape.TEXT:
                return [i for i in self.items if not (isinstance(i, str) and i in actual)]
            case Shape.SEQUENCE:
                return [i for i in self.items if not contains_value(actual, i)]
            case Shape.MAPPING:
                expected_pairs = _single_mapping(self.items)
                if expected_pairs is not None:
                    return _pairs_missing(expected_pairs, actual)
                return [i for i in self.items if not self._in_mapping(actual, i)]
        return None

    @staticmethod
    def _in_mapping(actual: Mapping[Any, Any], item: Any) -> bool:
        if isinstance(item, Mapping):
            return not _pairs_missing(item, actual)
        try:
            return item in actual
        except TypeError:
            return False


@dataclass(frozen=True, slots=True, init=False)
class HasKey(Matcher):
    """A mapping containing every given key."""

    keys: tuple[Any, ...]

    def __init__(self, *keys: Any) -> None:
        if not keys:
            msg = "has_key requires at least one key"
            raise ConfigurationError(msg)
        object.__setattr__(self, "keys", keys)

    def matches(self, actual: Any, /) -> bool:
        return isinstance(actual, Mapping) and not self._missing(actual)

    def description(self) -> str:
        return f"has {self._noun()} {_join(self.keys)}"

    def failure_message(self, actual: Any, /) -> str:
        if not isinstance(actual, Mapping):
            return f"expected a mapping, but got {actual!r}"
        return (
            f"expected {actual!r} to have keys {_join(self.keys)}\n"
            f"missing: {_join(self._missing(actual))}"
        )

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} not to have {self._noun()} {_join(self.keys)}, but it did"

    def _noun(self) -> str:
        return "key" if len(self.keys) == 1 else "keys"

    def _missing(self, actual: Mapping[Any, Any]) -> list[Any]:
        missing = []
        for key in self.keys:
            try:
                present = key in actual
            except TypeError:
                present = False
            if not present:
                missing.append(key)
        return missing


@dataclass(frozen=True, slots=True, init=False)
class HasValue(Matcher):
    """A mapping containing every given value."""

    values: tuple[Any, ...]

    def __init__(self, *values: Any) -> None:
        if not values:
            msg = "has_value requires at least one value"
            raise ConfigurationError(msg)
        object.__setattr__(self, "values", values)

    def matches(self, actual: Any, /) -> bool:
        return isinstance(actual, Mapping) and not self._missing(actual)

    def description(self) -> str:
        return f"has {self._noun()} {_join(self.values)}"

    def failure_message(self, actual: Any, /) -> str:
        if not isinstance(actual, Mapping):
            return f"expected a mapping, but got {actual!r}"
        return (
            f"expected {actual!r} to have values {_join(self.values)}\n"
            f"missing: {_join(self._missing(actual))}"
        )

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} not to have {self._noun()} {_join(self.values)}, but it did"

    def _noun(self) -> str:
        return "value" if len(self.values) == 1 else "values"

    def _missing(self, actual: Mapping[Any, Any]) -> list[Any]:
        return [v for v in self.values if not contains_value(actual.values(), v)]


@dataclass(frozen=True, slots=True, init=False)
class Contains(Matcher):
    """Exactly these elements, in any order (duplicate counts must match).

    A single mapping argument means: exactly these key/value pairs.
    """

    items: tuple[Any, ...]

    def __init__(self, *items: Any) -> None:
        object.__setattr__(self, "items", items)

    def matches(self, actual: Any, /) -> bool:
        difference = self._difference(actual)
        if difference is None:
            return False
        missing, extra = difference
        return not missing and not extra

    def description(self) -> str:
        return f"contains exactly {self._expected_text()} (in any order)"

    def failure_message(self, actual: Any, /) -> str:
        lines = [f"expected {actual!r} to contain exactly {self._expected_text()} (in any order)"]
        difference = self._difference(actual)
        if difference is not None:
            missing, extra = difference
            if missing:
                lines.append(f"missing: {self._format(missing)}")
            if extra:
                lines.append(f"extra: {self._format(extra)}")
        return "\n".join(lines)

    def negated_failure_message(self, actual: Any, /) -> str:
        return (
            f"expected {actual!r} not to contain exactly {self._expected_text()} "
            "(in any order), but it did"
        )

    def _expected_text(self) -> str:
        expected_pairs = _single_mapping(self.items)
        if expected_pairs is not None:
            return repr(expected_pairs)
        return _join(self.items)

    @staticmethod
    def _format(items: list[Any] | dict[Any, Any]) -> str:
        if isinstance(items, dict):
            return repr(items)
        return _join(items)

    def _difference(self, actual: Any) -> tuple[Any, Any] | None:
        """(missing, extra), or None when ``actual`` is not comparable."""
        expected_pairs = _single_mapping(self.items)
        match shape_of(actual):
            case Shape.MAPPING if expected_pairs is not None:
                return _pairs_missing(expected_pairs, actual), _pairs_missing(
                    actual, expected_pairs
                )
            case Shape.SEQUENCE:
                return (
                    multiset_difference(self.items, actual),
                    multiset_difference(actual, self.items),
                )
        return None


@dataclass(frozen=True, slots=True, init=False)
class ContainsExactly(Matcher):
    """Exactly these elements, in this order."""

    items: tuple[Any, ...]

    def __init__(self, *items: Any) -> None:
        object.__setattr__(self, "items", items)

    def matches(self, actual: Any, /) -> bool:
        if shape_of(actual) is not Shape.SEQUENCE:
            return False
        return values_equal(list(actual), list(self.items))

    def description(self) -> str:
        return f"contains exactly {list(self.items)!r} (in order)"

    def failure_message(self, actual: Any, /) -> str:
        lines = [f"expected {actual!r} to contain exactly {list(self.items)!r} (in order)"]
        if shape_of(actual) is not Shape.SEQUENCE:
            lines.append("but it is not a sequence")
            return "\n".join(lines)

        actual_items = list(actual)
        if len(actual_items) != len(self.items):
            lines.append(f"expected size {len(self.items)}, got {len(actual_items)}")
        else:
            lines.extend(
                f"at index {i}: expected {e!r}, got {a!r}"
                for i, (e, a) in enumerate(zip(self.items, actual_items, strict=True))
                if not values_equal(e, a)
            )
        return "\n".join(lines)

    def negated_failure_message(self, actual: Any, /) -> str:
        return (
            f"expected {actual!r} not to contain exactly {list(self.items)!r} "
            "(in order), but it did"
        )


def _is_interval(collection: Any, actual: Any) -> bool:
    return (
        isinstance(collection, range)
        and collection.step == 1
        and isinstance(actual, numbers.Real)
        and not isinstance(actual, bool)
    )


@dataclass(frozen=True, slots=True)
class IsIn(Matcher):
    """The actual value is a member of ``collection``.

    - mapping: actual is a key
    - string: actual is a substring
    - range with step 1: a real number within ``[start, stop)``, so
      ``is_in(range(1, 11))`` accepts 5.5
    - other ranges, set: native ``in``
    - other sequences: actual equals an element
    """

    collection: Any
    _shape: Shape = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        shape = shape_of(self.collection)
        if shape is Shape.SCALAR:
            msg = f"is_in requires a collection, got {self.collection!r}"
            raise ConfigurationError(msg)
        object.__setattr__(self, "_shape", shape)

    def matches(self, actual: Any, /) -> bool:
        match self._shape:
            case Shape.TEXT:
                return isinstance(actual, str) and actual in self.collection
            case Shape.MAPPING:
                return self._native_in(actual)
            case Shape.SEQUENCE if _is_interval(self.collection, actual):
                return self.collection.start <= actual < self.collection.stop
            case Shape.SEQUENCE if isinstance(self.collection, (range, set, frozenset)):
                return self._native_in(actual)
            case Shape.SEQUENCE:
                return contains_value(self.collection, actual)
        return False

    def description(self) -> str:
        return f"in {self.collection!r}"

    def failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} to be in {self.collection!r}"

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} not to be in {self.collection!r}, but it was"

    def _native_in(self, actual: Any) -> bool:
        try:
            return actual in self.collection
        except TypeError:
            return False
