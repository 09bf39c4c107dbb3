"""Core matchers: equality, identity, types, capabilities and truthiness.

Each matcher is a frozen dataclass, immutable after construction.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from minicrest._diff import compute_diff, format_diff
from minicrest._matcher import ConfigurationError, Matcher
from minicrest._types import flatten, values_equal


@dataclass(frozen=True, slots=True)
class Equals(Matcher):
    """Deep value equality.

    Lists, tuples and mappings compare element-wise; ``None`` equals only
    ``None`` and ``False`` is distinct from ``0``. When both sides are the
    same diffable kind the failure message carries a ``Diff:`` section.
    """

    expected: Any

    def matches(self, actual: Any, /) -> bool:
        return values_equal(actual, self.expected)

    def description(self) -> str:
        return f"equal to {self.expected!r}"

    def failure_message(self, actual: Any, /) -> str:
        message = f"expected {actual!r}\n      to equal {self.expected!r}"
        diff = format_diff(compute_diff(self.expected, actual))
        if diff:
            message += f"\n\n{diff}"
        return message

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r}\n  not to equal {self.expected!r}, but they are equal"


@dataclass(frozen=True, slots=True)
class Is(Matcher):
    """Reference identity (``actual is expected``).

    Given a Matcher, delegates everything to it so that
    ``is_(equals(1))`` reads naturally and composes with combinators.
    """

    expected: Any

    def matches(self, actual: Any, /) -> bool:
        if isinstance(self.expected, Matcher):
            return self.expected.matches(actual)
        return actual is self.expected

    def description(self) -> str:
        if isinstance(self.expected, Matcher):
            return self.expected.description()
        return f"the same object as {self.expected!r} (id: {id(self.expected)})"

    def failure_message(self, actual: Any, /) -> str:
        if isinstance(self.expected, Matcher):
            return self.expected.failure_message(actual)
        return (
            f"expected {actual!r} (id: {id(actual)}) to be the same object as "
            f"{self.expected!r} (id: {id(self.expected)})"
        )

    def negated_failure_message(self, actual: Any, /) -> str:
        if isinstance(self.expected, Matcher):
            return self.expected.negated_failure_message(actual)
        return (
            f"expected {actual!r} (id: {id(actual)}) not to be the same object as "
            f"{self.expected!r}, but they are the same object"
        )


@dataclass(frozen=True, slots=True)
class Anything(Matcher):
    """Always matches. A placeholder where any value is acceptable."""

    def matches(self, actual: Any, /) -> bool:
        return True

    def description(self) -> str:
        return "anything"

    def failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} to be anything (this should never fail)"

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} not to be anything, but everything is something"


@dataclass(frozen=True, slots=True)
class NoneValue(Matcher):
    def matches(self, actual: Any, /) -> bool:
        return actual is None

    def description(self) -> str:
        return "None"

    def failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} to be None"

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} not to be None, but it was"


@dataclass(frozen=True, slots=True)
class Truthy(Matcher):
    def matches(self, actual: Any, /) -> bool:
        return bool(actual)

    def description(self) -> str:
        return "truthy"

    def failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} to be truthy"

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} not to be truthy, but it was"


@dataclass(frozen=True, slots=True)
class Falsy(Matcher):
    def matches(self, actual: Any, /) -> bool:
        return not actual

    def description(self) -> str:
        return "falsy"

    def failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} to be falsy"

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} not to be falsy, but it was"


def _type_name(expected_type: type | tuple[type, ...]) -> str:
    if isinstance(expected_type, tuple):
        return " or ".join(t.__name__ for t in expected_type)
    return expected_type.__name__


def _check_type(expected_type: Any, role: str) -> None:
    types = expected_type if isinstance(expected_type, tuple) else (expected_type,)
    if not types or not all(isinstance(t, type) for t in types):
        msg = f"{role} requires a type or tuple of types, got {expected_type!r}"
        raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class IsA(Matcher):
    """``isinstance`` check. Subclasses and ABC registrations match."""

    expected_type: type | tuple[type, ...]

    def __post_init__(self) -> None:
        _check_type(self.expected_type, "is_a")

    def matches(self, actual: Any, /) -> bool:
        return isinstance(actual, self.expected_type)

    def description(self) -> str:
        return f"an instance of {_type_name(self.expected_type)}"

    def failure_message(self, actual: Any, /) -> str:
        return (
            f"expected {actual!r} to be an instance of {_type_name(self.expected_type)}, "
            f"but was {type(actual).__name__}"
        )

    def negated_failure_message(self, actual: Any, /) -> str:
        return (
            f"expected {actual!r} not to be an instance of "
            f"{_type_name(self.expected_type)}, but it is"
        )


@dataclass(frozen=True, slots=True)
class InstanceOf(Matcher):
    """Exact runtime type check. Subclasses do not match."""

    expected_type: type

    def __post_init__(self) -> None:
        if not isinstance(self.expected_type, type):
            msg = f"instance_of requires a type, got {self.expected_type!r}"
            raise ConfigurationError(msg)

    def matches(self, actual: Any, /) -> bool:
        return type(actual) is self.expected_type

    def description(self) -> str:
        return f"an exact instance of {self.expected_type.__name__}"

    def failure_message(self, actual: Any, /) -> str:
        return (
            f"expected {actual!r} to be an exact instance of "
            f"{self.expected_type.__name__}, but was a {type(actual).__name__}"
        )

    def negated_failure_message(self, actual: Any, /) -> str:
        return (
            f"expected {actual!r} not to be an exact instance of "
            f"{self.expected_type.__name__}, but it was"
        )


@dataclass(frozen=True, slots=True)
class DescendsFrom(Matcher):
    """The actual value is a class inheriting from ``expected_type``.

    Non-class values never match.
    """

    expected_type: type

    def __post_init__(self) -> None:
        _check_type(self.expected_type, "descends_from")

    def matches(self, actual: Any, /) -> bool:
        return isinstance(actual, type) and issubclass(actual, self.expected_type)

    def description(self) -> str:
        return f"a subclass of {_type_name(self.expected_type)}"

    def failure_message(self, actual: Any, /) -> str:
        if not isinstance(actual, type):
            return (
                f"expected {actual!r}\n      to be a subclass of "
                f"{_type_name(self.expected_type)}\nbut it is not a class"
            )
        bases = ", ".join(c.__name__ for c in actual.__mro__[1:])
        return (
            f"expected {actual.__name__}\n      to be a subclass of "
            f"{_type_name(self.expected_type)}\nbut its ancestors are {bases or 'none'}"
        )

    def negated_failure_message(self, actual: Any, /) -> str:
        name = actual.__name__ if isinstance(actual, type) else repr(actual)
        return (
            f"expected {name}\n      not to be a subclass of "
            f"{_type_name(self.expected_type)}\nbut it is"
        )


@dataclass(frozen=True, slots=True, init=False)
class RespondsTo(Matcher):
    """Every named attribute or method is present on the actual value."""

    names: tuple[str, ...]

    def __init__(self, *names: str | list[str] | tuple[str, ...]) -> None:
        flat = flatten(names)
        if not flat or not all(isinstance(n, str) for n in flat):
            msg = f"responds_to requires one or more attribute names, got {names!r}"
            raise ConfigurationError(msg)
        object.__setattr__(self, "names", flat)

    def matches(self, actual: Any, /) -> bool:
        return not self._missing(actual)

    def description(self) -> str:
        return f"respond to {self._names()}"

    def failure_message(self, actual: Any, /) -> str:
        missing = ", ".join(repr(n) for n in self._missing(actual))
        return f"expected {actual!r}\n      to respond to {self._names()}\nmissing: {missing}"

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r}\n      not to respond to {self._names()}\nbut it does"

    def _names(self) -> str:
        return ", ".join(repr(n) for n in self.names)

    def _missing(self, actual: Any) -> list[str]:
        return [n for n in self.names if not hasattr(actual, n)]


@dataclass(frozen=True, slots=True)
class HasAttribute(Matcher):
    """The actual value exposes ``name``, optionally with a matching value.

    Mappings are probed by key; other objects by attribute.
    """

    name: str
    value_matcher: Matcher | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            msg = f"has_attribute requires a string name, got {type(self.name).__name__}"
            raise ConfigurationError(msg)
        if self.value_matcher is not None and not isinstance(self.value_matcher, Matcher):
            msg = (
                f"has_attribute value matcher must be a Matcher, "
                f"got {type(self.value_matcher).__name__}"
            )
            raise ConfigurationError(msg)

    def matches(self, actual: Any, /) -> bool:
        if not self._has(actual):
            return False
        if self.value_matcher is None:
            return True
        return self.value_matcher.matches(self._get(actual))

    def description(self) -> str:
        if self.value_matcher is None:
            return f"has attribute {self.name!r}"
        return f"has attribute {self.name!r} {self.value_matcher.description()}"

    def failure_message(self, actual: Any, /) -> str:
        if not self._has(actual):
            return (
                f"expected {actual!r} to have attribute {self.name!r}\n"
                f"but it does not have {self.name!r}"
            )
        if self.value_matcher is None:
            return f"expected {actual!r} to have attribute {self.name!r}"
        return (
            f"expected {actual!r} to have attribute {self.name!r} "
            f"{self.value_matcher.description()}\n"
            f"but {self.name!r} was {self._get(actual)!r}"
        )

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} not to have attribute {self.name!r}, but it did"

    def _has(self, actual: Any) -> bool:
        if isinstance(actual, Mapping):
            return self.name in actual
        return hasattr(actual, self.name)

    def _get(self, actual: Any) -> Any:
        if isinstance(actual, Mapping):
            return actual[self.name]
        return getattr(actual, self.name)
