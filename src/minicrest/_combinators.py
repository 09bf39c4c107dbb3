"""Combinators: Boolean logic over matchers.

Not, And and Or wrap one or two matchers; AllOf, NoneOf and SomeOf take any
number (nested lists/tuples are flattened). Children are held in order and
never mutated, so descriptions are a literal function of child order.

Unlike plain predicate composition, failure reporting is never
short-circuited: every child is consulted so the message can name each
side that failed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from minicrest._matcher import ConfigurationError, Matcher, require_matcher
from minicrest._types import flatten


def _indented(lines: list[str]) -> str:
    return "\n".join(f"  {line}" for line in lines)


@dataclass(frozen=True, slots=True)
class Not(Matcher):
    """Inverts the inner matcher. Messages swap with the inner's."""

    matcher: Matcher

    def __post_init__(self) -> None:
        require_matcher(self.matcher, "never()")

    def matches(self, actual: Any, /) -> bool:
        return not self.matcher.matches(actual)

    def description(self) -> str:
        return f"not {self.matcher.description()}"

    def failure_message(self, actual: Any, /) -> str:
        return self.matcher.negated_failure_message(actual)

    def negated_failure_message(self, actual: Any, /) -> str:
        return self.matcher.failure_message(actual)


@dataclass(frozen=True, slots=True)
class And(Matcher):
    """Both sides must match."""

    left: Matcher
    right: Matcher

    def __post_init__(self) -> None:
        require_matcher(self.left, "left side of and")
        require_matcher(self.right, "right side of and")

    def matches(self, actual: Any, /) -> bool:
        return self.left.matches(actual) and self.right.matches(actual)

    def description(self) -> str:
        return f"({self.left.description()} and {self.right.description()})"

    def failure_message(self, actual: Any, /) -> str:
        messages = [
            side.failure_message(actual)
            for side in (self.left, self.right)
            if not side.matches(actual)
        ]
        if not messages:
            return f"expected {actual!r} to match {self.description()}, and it did"
        return "\n  AND\n".join(messages)

    def negated_failure_message(self, actual: Any, /) -> str:
        return (
            f"expected {actual!r} not to match both conditions:\n"
            f"{_indented([self.left.description(), self.right.description()])}\n"
            "but it matched both"
        )


@dataclass(frozen=True, slots=True)
class Or(Matcher):
    """At least one side must match."""

    left: Matcher
    right: Matcher

    def __post_init__(self) -> None:
        require_matcher(self.left, "left side of or")
        require_matcher(self.right, "right side of or")

    def matches(self, actual: Any, /) -> bool:
        return self.left.matches(actual) or self.right.matches(actual)

    def description(self) -> str:
        return f"({self.left.description()} or {self.right.description()})"

    def failure_message(self, actual: Any, /) -> str:
        return (
            f"expected {actual!r} to match at least one of:\n"
            f"{_indented([self.left.description(), self.right.description()])}\n"
            "but it matched neither:\n"
            f"{_indented([self.left.failure_message(actual), self.right.failure_message(actual)])}"
        )

    def negated_failure_message(self, actual: Any, /) -> str:
        matched = [
            side.description() for side in (self.left, self.right) if side.matches(actual)
        ]
        return (
            f"expected {actual!r} not to match either condition, but it matched:\n"
            f"{_indented(matched)}"
        )


@dataclass(frozen=True, slots=True, init=False)
class _VariadicCombinator(Matcher):
    matchers: tuple[Matcher, ...]

    def __init__(self, *matchers: Matcher | list[Matcher] | tuple[Matcher, ...]) -> None:
        flat = flatten(matchers)
        if not flat:
            msg = f"{type(self).__name__} requires at least one matcher"
            raise ConfigurationError(msg)
        for m in flat:
            require_matcher(m, f"{type(self).__name__} child")
        object.__setattr__(self, "matchers", flat)

    def _descriptions(self, matchers: tuple[Matcher, ...] | list[Matcher] | None = None) -> str:
        return _indented([m.description() for m in (self.matchers if matchers is None else matchers)])

    def _joined(self) -> str:
        return ", ".join(m.description() for m in self.matchers)


@dataclass(frozen=True, slots=True, init=False)
class AllOf(_VariadicCombinator):
    """Every matcher must match."""

    def matches(self, actual: Any, /) -> bool:
        return all(m.matches(actual) for m in self.matchers)

    def description(self) -> str:
        return f"all of: {self._joined()}"

    def failure_message(self, actual: Any, /) -> str:
        failed = [m.failure_message(actual) for m in self.matchers if not m.matches(actual)]
        return (
            f"expected {actual!r} to match all of:\n"
            f"{self._descriptions()}\n"
            "but failed:\n"
            f"{_indented(failed)}"
        )

    def negated_failure_message(self, actual: Any, /) -> str:
        return (
            f"expected {actual!r} not to match all conditions, but it matched all:\n"
            f"{self._descriptions()}"
        )


@dataclass(frozen=True, slots=True, init=False)
class NoneOf(_VariadicCombinator):
    """No matcher may match."""

    def matches(self, actual: Any, /) -> bool:
        return not any(m.matches(actual) for m in self.matchers)

    def description(self) -> str:
        return f"none of: {self._joined()}"

    def failure_message(self, actual: Any, /) -> str:
        matched = [m for m in self.matchers if m.matches(actual)]
        return (
            f"expected {actual!r} to match none of:\n"
            f"{self._descriptions()}\n"
            "but matched:\n"
            f"{self._descriptions(matched)}"
        )

    def negated_failure_message(self, actual: Any, /) -> str:
        return (
            f"expected {actual!r} to match at least one of:\n"
            f"{self._descriptions()}\n"
            "but matched none"
        )


@dataclass(frozen=True, slots=True, init=False)
class SomeOf(_VariadicCombinator):
    """At least one matcher must match."""

    def matches(self, actual: Any, /) -> bool:
        return any(m.matches(actual) for m in self.matchers)

    def description(self) -> str:
        return f"some of: {self._joined()}"

    def failure_message(self, actual: Any, /) -> str:
        return (
            f"expected {actual!r} to match at least one of:\n"
            f"{self._descriptions()}\n"
            "but matched none:\n"
            f"{_indented([m.failure_message(actual) for m in self.matchers])}"
        )

    def negated_failure_message(self, actual: Any, /) -> str:
        matched = [m for m in self.matchers if m.matches(actual)]
        return (
            f"expected {actual!r} to match none of the conditions, but matched:\n"
            f"{self._descriptions(matched)}"
        )
