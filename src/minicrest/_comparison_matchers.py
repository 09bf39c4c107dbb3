"""Ordering matchers: greater/less than, between and close-to.

Comparisons use the value's native operators. Values that cannot be
ordered against the expected value (``TypeError``) do not match.
"""

from __future__ import annotations

import numbers
import operator
from abc import abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from minicrest._matcher import Matcher

# Decimal places used when reporting the difference in IsCloseTo failures.
CLOSE_TO_PRECISION = 10


def _compare(op: Callable[[Any, Any], Any], actual: Any, expected: Any) -> bool:
    try:
        return bool(op(actual, expected))
    except TypeError:
        return False


def _format_difference(difference: Any) -> str:
    if isinstance(difference, numbers.Real):
        return str(round(difference, CLOSE_TO_PRECISION))
    return repr(difference)


@dataclass(frozen=True, slots=True)
class _ComparisonMatcher(Matcher):
    expected: Any

    def matches(self, actual: Any, /) -> bool:
        return _compare(self._operator(), actual, self.expected)

    def description(self) -> str:
        return f"{self._label()} {self.expected!r}"

    def failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} to be {self._label()} {self.expected!r}"

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} not to be {self._label()} {self.expected!r}, but it was"

    @abstractmethod
    def _operator(self) -> Callable[[Any, Any], Any]: ...

    @abstractmethod
    def _label(self) -> str: ...


@dataclass(frozen=True, slots=True)
class IsGreaterThan(_ComparisonMatcher):
    def _operator(self) -> Callable[[Any, Any], Any]:
        return operator.gt

    def _label(self) -> str:
        return "greater than"


@dataclass(frozen=True, slots=True)
class IsGreaterThanOrEqualTo(_ComparisonMatcher):
    def _operator(self) -> Callable[[Any, Any], Any]:
        return operator.ge

    def _label(self) -> str:
        return "greater than or equal to"


@dataclass(frozen=True, slots=True)
class IsLessThan(_ComparisonMatcher):
    def _operator(self) -> Callable[[Any, Any], Any]:
        return operator.lt

    def _label(self) -> str:
        return "less than"


@dataclass(frozen=True, slots=True)
class IsLessThanOrEqualTo(_ComparisonMatcher):
    def _operator(self) -> Callable[[Any, Any], Any]:
        return operator.le

    def _label(self) -> str:
        return "less than or equal to"


@dataclass(frozen=True, slots=True)
class Between(Matcher):
    """``min <= actual <= max``, or strict on both bounds when exclusive."""

    min: Any
    max: Any
    exclusive: bool = False

    def matches(self, actual: Any, /) -> bool:
        if self.exclusive:
            return _compare(operator.gt, actual, self.min) and _compare(
                operator.lt, actual, self.max
            )
        return _compare(operator.ge, actual, self.min) and _compare(
            operator.le, actual, self.max
        )

    def description(self) -> str:
        return f"between {self.min!r} and {self.max!r} ({self._range_type()})"

    def failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} to be {self.description()}"

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} not to be {self.description()}, but it was"

    def _range_type(self) -> str:
        return "exclusively" if self.exclusive else "inclusively"


@dataclass(frozen=True, slots=True)
class IsCloseTo(Matcher):
    """``abs(actual - expected) <= delta``; the bound is inclusive."""

    expected: Any
    delta: Any

    def matches(self, actual: Any, /) -> bool:
        difference = self._difference(actual)
        return difference is not None and _compare(operator.le, difference, self.delta)

    def description(self) -> str:
        return f"close to {self.expected!r} (within {self.delta!r})"

    def failure_message(self, actual: Any, /) -> str:
        difference = self._difference(actual)
        if difference is None:
            return f"expected {actual!r} to be {self.description()}, but it is not a number"
        return (
            f"expected {actual!r} to be {self.description()}, "
            f"but difference was {_format_difference(difference)}"
        )

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r} not to be {self.description()}, but it was"

    def _difference(self, actual: Any) -> Any:
        if isinstance(actual, bool):
            return None
        try:
            return abs(actual - self.expected)
        except TypeError:
            return None
