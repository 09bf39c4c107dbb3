"""Matcher: the contract every predicate implements.

A matcher captures its configuration at construction time and is immutable
afterwards. It answers four questions about an actual value:

- ``matches(actual)``: does the value satisfy the expectation?
- ``description()``: what is expected, independent of any actual value
- ``failure_message(actual)``: why ``matches`` was False when True was wanted
- ``negated_failure_message(actual)``: why ``matches`` was True when False was wanted

Both message methods are callable whatever ``matches`` returned.

Matchers compose with ``&`` / ``and_()`` (And), ``|`` / ``or_()`` (Or) and
``~`` (Not).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from minicrest._combinators import And, Not, Or


class MatcherError(Exception):
    """Base class for minicrest errors (other than assertion failures)."""


class ConfigurationError(MatcherError, ValueError):
    """A matcher or registration was set up with invalid arguments.

    Raised at construction time, at the call site of the mistake.
    """


class UsageError(MatcherError, TypeError):
    """An assertion operation was used with the wrong kind of binding.

    For example ``raises_error()`` on an asserter bound to a plain value.
    """


class Matcher(ABC):
    """Abstract base class for all matchers.

    Subclasses implement ``matches`` and ``description``; the default
    messages are built from the description.

    >>> class IsEven(Matcher):
    ...     def matches(self, actual):
    ...         return isinstance(actual, int) and actual % 2 == 0
    ...     def description(self):
    ...         return "an even number"
    >>> IsEven().failure_message(3)
    'expected 3 to be an even number'
    """

    __slots__ = ()

    @abstractmethod
    def matches(self, actual: Any, /) -> bool:
        """Return True if ``actual`` satisfies this matcher."""

    @abstractmethod
    def description(self) -> str:
        """Describe the expectation without reference to an actual value."""

    def failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} to be {self.description()}"

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} not to be {self.description()}"

    def and_(self, other: Matcher) -> And:
        """Combine with ``other``; both must match."""
        from minicrest._combinators import And

        return And(self, other)

    def or_(self, other: Matcher) -> Or:
        """Combine with ``other``; at least one must match."""
        from minicrest._combinators import Or

        return Or(self, other)

    def __and__(self, other: Matcher) -> And:
        return self.and_(other)

    def __or__(self, other: Matcher) -> Or:
        return self.or_(other)

    def __invert__(self) -> Not:
        from minicrest._combinators import Not

        return Not(self)

    def __str__(self) -> str:
        return self.description()


def require_matcher(value: Any, role: str) -> Matcher:
    """Return ``value`` if it is a Matcher, else raise ConfigurationError."""
    if not isinstance(value, Matcher):
        msg = f"{role} must be a Matcher, got {type(value).__name__}: {value!r}"
        raise ConfigurationError(msg)
    return value
