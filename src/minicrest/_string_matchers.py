"""String matchers: prefix, suffix, regex and blank.

Each matcher is a frozen dataclass, immutable after construction.
All matchers return False for non-string actual values instead of raising.

Regex uses ``google-re2`` for guaranteed linear-time matching. RE2 does not
support backreferences or lookahead/lookbehind because they require
backtracking; patterns using them are rejected at construction time.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Any

import re2

from minicrest._matcher import ConfigurationError, Matcher


@dataclass(frozen=True, slots=True)
class _AffixMatcher(Matcher):
    """Shared behavior for StartsWith and EndsWith."""

    affix: str

    def __post_init__(self) -> None:
        if not isinstance(self.affix, str):
            msg = f"{self._label()} requires a string, got {type(self.affix).__name__}"
            raise ConfigurationError(msg)

    def matches(self, actual: Any, /) -> bool:
        if not isinstance(actual, str):
            return False
        return self._test(actual)

    def description(self) -> str:
        return f"a string {self._participle()} {self.affix!r}"

    def failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r}\n      to {self._label()} {self.affix!r}"

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r}\n      not to {self._label()} {self.affix!r}\nbut it does"

    @abstractmethod
    def _label(self) -> str: ...

    @abstractmethod
    def _participle(self) -> str: ...

    @abstractmethod
    def _test(self, actual: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class StartsWith(_AffixMatcher):
    """String prefix match. An empty prefix matches every string."""

    def _label(self) -> str:
        return "start with"

    def _participle(self) -> str:
        return "starting with"

    def _test(self, actual: str) -> bool:
        return actual.startswith(self.affix)


@dataclass(frozen=True, slots=True)
class EndsWith(_AffixMatcher):
    """String suffix match. An empty suffix matches every string."""

    def _label(self) -> str:
        return "end with"

    def _participle(self) -> str:
        return "ending with"

    def _test(self, actual: str) -> bool:
        return actual.endswith(self.affix)


@dataclass(frozen=True, slots=True)
class MatchesPattern(Matcher):
    """Regular expression search.

    A string pattern is compiled at construction time via ``google-re2``.
    An already compiled pattern (anything with a ``search`` method, such
    as ``re.compile`` output) is used as-is. Uses search (not fullmatch) to match anywhere in the
    string; anchor the pattern to match the whole string.

    Raises:
        ConfigurationError: If the pattern is not valid RE2 syntax.
    """

    pattern: Any
    _compiled: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.pattern, str):
            try:
                compiled = re2.compile(self.pattern)
            except re2.error as e:
                msg = f'invalid regex pattern "{self.pattern}": {e}'
                raise ConfigurationError(msg) from e
        elif callable(getattr(self.pattern, "search", None)):
            compiled = self.pattern
        else:
            msg = f"matches_pattern requires a pattern string, got {self.pattern!r}"
            raise ConfigurationError(msg)
        object.__setattr__(self, "_compiled", compiled)

    def matches(self, actual: Any, /) -> bool:
        if not isinstance(actual, str):
            return False
        return self._compiled.search(actual) is not None

    def description(self) -> str:
        return f"a string matching {self._source()}"

    def failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r}\n      to match pattern {self._source()}"

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r}\n      not to match pattern {self._source()}\nbut it does"

    def _source(self) -> str:
        if isinstance(self.pattern, str):
            return f"/{self.pattern}/"
        return f"/{getattr(self.pattern, 'pattern', self.pattern)}/"


@dataclass(frozen=True, slots=True)
class Blank(Matcher):
    """A string that is empty or whitespace only."""

    def matches(self, actual: Any, /) -> bool:
        if not isinstance(actual, str):
            return False
        return not actual.strip()

    def description(self) -> str:
        return "a blank string"

    def failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r}\n      to be blank"

    def negated_failure_message(self, actual: Any, /) -> str:
        return f"expected {actual!r}\n      not to be blank\nbut it is"
