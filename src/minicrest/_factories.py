"""Factory functions: the flat, snake_case way to build matchers.

Every factory returns a fresh, immutable Matcher::

    from minicrest import assert_that, all_items, is_greater_than

    assert_that([1, 2, 3]).matches(all_items(is_greater_than(0)))

``BUILTIN_FACTORIES`` maps each public factory name to its function. The
default registry reserves these names, and the Assertions mixin exposes
them as methods.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from minicrest._collection_matchers import (
    Contains,
    ContainsExactly,
    Empty,
    HasKey,
    HasSize,
    HasValue,
    Includes,
    IsIn,
)
from minicrest._combinators import AllOf, NoneOf, Not, SomeOf
from minicrest._comparison_matchers import (
    Between,
    IsCloseTo,
    IsGreaterThan,
    IsGreaterThanOrEqualTo,
    IsLessThan,
    IsLessThanOrEqualTo,
)
from minicrest._core_matchers import (
    Anything,
    DescendsFrom,
    Equals,
    Falsy,
    HasAttribute,
    InstanceOf,
    Is,
    IsA,
    NoneValue,
    RespondsTo,
    Truthy,
)
from minicrest._quantifiers import (
    AllEntries,
    AllItems,
    NoEntry,
    NoItems,
    SomeEntry,
    SomeItems,
)
from minicrest._string_matchers import Blank, EndsWith, MatchesPattern, StartsWith

if TYPE_CHECKING:
    from collections.abc import Callable

    from minicrest._matcher import Matcher
    from minicrest._types import EntryPredicate

# ═══════════════════════════════════════════════════════════════════════════════
# Values, identity and types
# ═══════════════════════════════════════════════════════════════════════════════


def equals(expected: Any) -> Equals:
    """Deep value equality, with a structural diff on failure."""
    return Equals(expected)


def is_(expected: Any) -> Is:
    """Identity; given a Matcher, behaves exactly like it."""
    return Is(expected)


def anything() -> Anything:
    return Anything()


def is_none() -> NoneValue:
    return NoneValue()


def truthy() -> Truthy:
    return Truthy()


def falsy() -> Falsy:
    return Falsy()


def is_a(expected_type: type | tuple[type, ...]) -> IsA:
    """``isinstance`` check; subclasses match."""
    return IsA(expected_type)


def instance_of(expected_type: type) -> InstanceOf:
    """Exact type check; subclasses do not match."""
    return InstanceOf(expected_type)


def descends_from(expected_type: type) -> DescendsFrom:
    return DescendsFrom(expected_type)


def responds_to(*names: str | list[str] | tuple[str, ...]) -> RespondsTo:
    return RespondsTo(*names)


def has_attribute(name: str, value_matcher: Matcher | None = None) -> HasAttribute:
    return HasAttribute(name, value_matcher)


# ═══════════════════════════════════════════════════════════════════════════════
# Strings
# ═══════════════════════════════════════════════════════════════════════════════


def starts_with(prefix: str) -> StartsWith:
    return StartsWith(prefix)


def ends_with(suffix: str) -> EndsWith:
    return EndsWith(suffix)


def matches_pattern(pattern: Any) -> MatchesPattern:
    """Regex search; ``pattern`` is an RE2 string or a compiled pattern."""
    return MatchesPattern(pattern)


def blank() -> Blank:
    return Blank()


# ═══════════════════════════════════════════════════════════════════════════════
# Size and ordering
# ═══════════════════════════════════════════════════════════════════════════════


def empty() -> Empty:
    return Empty()


def has_size(expected: int | Matcher) -> HasSize:
    return HasSize(expected)


def is_greater_than(expected: Any) -> IsGreaterThan:
    return IsGreaterThan(expected)


def is_greater_than_or_equal_to(expected: Any) -> IsGreaterThanOrEqualTo:
    return IsGreaterThanOrEqualTo(expected)


def is_less_than(expected: Any) -> IsLessThan:
    return IsLessThan(expected)


def is_less_than_or_equal_to(expected: Any) -> IsLessThanOrEqualTo:
    return IsLessThanOrEqualTo(expected)


def between(min: Any, max: Any, *, exclusive: bool = False) -> Between:  # noqa: A002
    return Between(min, max, exclusive)


def is_close_to(expected: Any, delta: Any) -> IsCloseTo:
    return IsCloseTo(expected, delta)


# ═══════════════════════════════════════════════════════════════════════════════
# Collections
# ═══════════════════════════════════════════════════════════════════════════════


def includes(*items: Any) -> Includes:
    return Includes(*items)


def has_key(*keys: Any) -> HasKey:
    return HasKey(*keys)


def has_value(*values: Any) -> HasValue:
    return HasValue(*values)


def contains(*items: Any) -> Contains:
    """Same elements in any order; pass one mapping to compare key/value sets."""
    return Contains(*items)


def contains_exactly(*items: Any) -> ContainsExactly:
    return ContainsExactly(*items)


def is_in(collection: Any) -> IsIn:
    return IsIn(collection)


def all_items(item_matcher: Matcher) -> AllItems:
    return AllItems(item_matcher)


def some_items(item_matcher: Matcher) -> SomeItems:
    return SomeItems(item_matcher)


def no_items(item_matcher: Matcher) -> NoItems:
    return NoItems(item_matcher)


def all_entries(predicate: Matcher | EntryPredicate) -> AllEntries:
    return AllEntries(predicate)


def some_entry(predicate: Matcher | EntryPredicate) -> SomeEntry:
    return SomeEntry(predicate)


def no_entry(predicate: Matcher | EntryPredicate) -> NoEntry:
    return NoEntry(predicate)


# ═══════════════════════════════════════════════════════════════════════════════
# Combinators
# ═══════════════════════════════════════════════════════════════════════════════


def never(matcher: Matcher) -> Not:
    """Negate ``matcher``. Double negation is equivalent to ``matcher`` itself."""
    return Not(matcher)


def all_of(*matchers: Matcher | list[Matcher] | tuple[Matcher, ...]) -> AllOf:
    return AllOf(*matchers)


def none_of(*matchers: Matcher | list[Matcher] | tuple[Matcher, ...]) -> NoneOf:
    return NoneOf(*matchers)


def some_of(*matchers: Matcher | list[Matcher] | tuple[Matcher, ...]) -> SomeOf:
    return SomeOf(*matchers)


BUILTIN_FACTORIES: MappingProxyType[str, Callable[..., Matcher]] = MappingProxyType(
    {
        f.__name__: f
        for f in (
            equals,
            is_,
            anything,
            is_none,
            truthy,
            falsy,
            is_a,
            instance_of,
            descends_from,
            responds_to,
            has_attribute,
            starts_with,
            ends_with,
            matches_pattern,
            blank,
            empty,
            has_size,
            is_greater_than,
            is_greater_than_or_equal_to,
            is_less_than,
            is_less_than_or_equal_to,
            between,
            is_close_to,
            includes,
            has_key,
            has_value,
            contains,
            contains_exactly,
            is_in,
            all_items,
            some_items,
            no_items,
            all_entries,
            some_entry,
            no_entry,
            never,
            all_of,
            none_of,
            some_of,
        )
    }
)
