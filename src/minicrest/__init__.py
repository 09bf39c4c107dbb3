"""minicrest: composable Hamcrest-style matchers and assertions.

All public names are exported from this module for flat imports:

    from minicrest import assert_that, equals, contains, all_items

Matchers registered with ``register_matcher`` are reachable as attributes of
this module (``minicrest.<name>``).
"""

from typing import Any

__version__ = "0.1.0"

from minicrest._asserter import Asserter, MismatchError, assert_that
from minicrest._assertions import Assertions

# Concrete matchers
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
from minicrest._combinators import AllOf, And, NoneOf, Not, Or, SomeOf
from minicrest._comparison_matchers import (
    CLOSE_TO_PRECISION,
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

# Diff engine, see minicrest._diff for details
from minicrest._diff import (
    STRING_DIFF_CONTEXT,
    STRING_DIFF_MIN_LENGTH,
    DiffEntry,
    ExtraIndex,
    ExtraKey,
    FirstDifference,
    IndexMismatch,
    KeyMismatch,
    LengthMismatch,
    MissingIndex,
    MissingKey,
    SizeMismatch,
    compute_diff,
    format_diff,
)

# Factories
from minicrest._factories import (
    BUILTIN_FACTORIES,
    all_entries,
    all_items,
    all_of,
    anything,
    between,
    blank,
    contains,
    contains_exactly,
    descends_from,
    empty,
    ends_with,
    equals,
    falsy,
    has_attribute,
    has_key,
    has_size,
    has_value,
    includes,
    instance_of,
    is_,
    is_a,
    is_close_to,
    is_greater_than,
    is_greater_than_or_equal_to,
    is_in,
    is_less_than,
    is_less_than_or_equal_to,
    is_none,
    matches_pattern,
    never,
    no_entry,
    no_items,
    none_of,
    responds_to,
    some_entry,
    some_items,
    some_of,
    starts_with,
    truthy,
)
from minicrest._matcher import ConfigurationError, Matcher, MatcherError, UsageError
from minicrest._quantifiers import (
    AllEntries,
    AllItems,
    NoEntry,
    NoItems,
    SomeEntry,
    SomeItems,
)

# Registry, see minicrest._registry for details
from minicrest._registry import (
    DuplicateMatcherError,
    MatcherRegistry,
    UnknownMatcherError,
    default_registry,
    register_matcher,
)
from minicrest._string_matchers import Blank, EndsWith, MatchesPattern, StartsWith
from minicrest._types import EntryPredicate, Shape, shape_of, values_equal


def __getattr__(name: str) -> Any:
    if name.startswith("_"):
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    return default_registry.factory(name)


__all__ = [
    # Assertions
    "assert_that",
    "Asserter",
    "Assertions",
    "MismatchError",
    # Errors
    "MatcherError",
    "ConfigurationError",
    "UsageError",
    # Matcher protocol
    "Matcher",
    # Core matchers
    "Equals",
    "Is",
    "Anything",
    "NoneValue",
    "Truthy",
    "Falsy",
    "IsA",
    "InstanceOf",
    "DescendsFrom",
    "RespondsTo",
    "HasAttribute",
    # String matchers
    "StartsWith",
    "EndsWith",
    "MatchesPattern",
    "Blank",
    # Comparison matchers
    "IsGreaterThan",
    "IsGreaterThanOrEqualTo",
    "IsLessThan",
    "IsLessThanOrEqualTo",
    "Between",
    "IsCloseTo",
    "CLOSE_TO_PRECISION",
    # Collection matchers
    "Empty",
    "HasSize",
    "Includes",
    "HasKey",
    "HasValue",
    "Contains",
    "ContainsExactly",
    "IsIn",
    # Quantifiers
    "AllItems",
    "SomeItems",
    "NoItems",
    "AllEntries",
    "SomeEntry",
    "NoEntry",
    # Combinators
    "Not",
    "And",
    "Or",
    "AllOf",
    "NoneOf",
    "SomeOf",
    # Factories
    "BUILTIN_FACTORIES",
    "equals",
    "is_",
    "anything",
    "is_none",
    "truthy",
    "falsy",
    "is_a",
    "instance_of",
    "descends_from",
    "responds_to",
    "has_attribute",
    "starts_with",
    "ends_with",
    "matches_pattern",
    "blank",
    "empty",
    "has_size",
    "is_greater_than",
    "is_greater_than_or_equal_to",
    "is_less_than",
    "is_less_than_or_equal_to",
    "between",
    "is_close_to",
    "includes",
    "has_key",
    "has_value",
    "contains",
    "contains_exactly",
    "is_in",
    "all_items",
    "some_items",
    "no_items",
    "all_entries",
    "some_entry",
    "no_entry",
    "never",
    "all_of",
    "none_of",
    "some_of",
    # Diff engine
    "DiffEntry",
    "MissingKey",
    "ExtraKey",
    "KeyMismatch",
    "SizeMismatch",
    "MissingIndex",
    "ExtraIndex",
    "IndexMismatch",
    "LengthMismatch",
    "FirstDifference",
    "compute_diff",
    "format_diff",
    "STRING_DIFF_MIN_LENGTH",
    "STRING_DIFF_CONTEXT",
    # Registry
    "MatcherRegistry",
    "DuplicateMatcherError",
    "UnknownMatcherError",
    "default_registry",
    "register_matcher",
    # Value model
    "Shape",
    "shape_of",
    "values_equal",
    "EntryPredicate",
]

default_registry.reserve(name for name in globals() if not name.startswith("_"))
