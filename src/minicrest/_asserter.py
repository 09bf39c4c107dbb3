"""Asserter: the fluent entry point that turns matcher results into failures.

An Asserter binds exactly one subject: an actual value, or a zero-argument
callable ("block") whose raising behavior is under test::

    assert_that(response.status).equals(200)
    assert_that(block=lambda: parse("")).raises_error(ValueError)

Value operations (``matches``, ``equals``, ``is_``, ``never``) need a bound
value; block operations (``raises_error``, ``raises_nothing``) need a
block. Mixing them up is a UsageError, not an assertion failure.

Failures raise MismatchError, an AssertionError subclass, so any test
runner reports them as ordinary test failures.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from minicrest._combinators import Not
from minicrest._core_matchers import Equals, Is
from minicrest._matcher import ConfigurationError, Matcher, UsageError, require_matcher

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class _Unset:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<unset>"


UNSET: Final = _Unset()


class MismatchError(AssertionError):
    """An assertion did not hold.

    Attributes:
        matcher: The matcher that rejected the value, or None for block
            assertions.
        actual: The value under test, or the exception a block raised.
    """

    def __init__(self, message: str, *, matcher: Matcher | None = None, actual: Any = None) -> None:
        super().__init__(message)
        self.matcher = matcher
        self.actual = actual


@dataclass(frozen=True, slots=True)
class Asserter:
    """Binds a subject and an optional label for failure messages.

    Prefer ``assert_that()`` over constructing this directly.
    """

    actual: Any = UNSET
    message: str | None = None
    block: Callable[[], Any] | None = None

    def __post_init__(self) -> None:
        has_value = self.actual is not UNSET
        if has_value and self.block is not None:
            msg = "assert_that takes an actual value or a block, not both"
            raise UsageError(msg)
        if not has_value and self.block is None:
            msg = "assert_that requires an actual value or a block"
            raise UsageError(msg)
        if self.block is not None and not callable(self.block):
            msg = f"block must be callable, got {type(self.block).__name__}"
            raise UsageError(msg)

    # ── value operations ──────────────────────────────────────────────────────

    def matches(self, matcher: Matcher) -> bool:
        """Assert that the bound value satisfies ``matcher``."""
        self._require_value("matches")
        require_matcher(matcher, "matches() argument")
        if matcher.matches(self.actual):
            return True
        logger.debug("assertion failed: expected %s", matcher.description())
        raise MismatchError(
            self._labelled(matcher.failure_message(self.actual)),
            matcher=matcher,
            actual=self.actual,
        )

    def equals(self, expected: Any) -> bool:
        return self.matches(Equals(expected))

    def is_(self, expected: Any) -> bool:
        return self.matches(Is(expected))

    def never(self, matcher: Matcher) -> bool:
        """Assert that the bound value does NOT satisfy ``matcher``."""
        return self.matches(Not(matcher))

    # ── block operations ──────────────────────────────────────────────────────

    def raises_error(
        self,
        expected_class: type[Exception] | None = None,
        message_matcher: Matcher | None = None,
    ) -> Exception:
        """Assert that the block raises.

        Args:
            expected_class: Required exception class; subclasses are accepted.
                None accepts any Exception.
            message_matcher: Optional matcher applied to ``str(error)``.

        Returns:
            The exception the block raised, for further inspection.
        """
        block = self._require_block("raises_error")
        if expected_class is not None and not (
            isinstance(expected_class, type) and issubclass(expected_class, Exception)
        ):
            msg = f"raises_error requires an Exception subclass, got {expected_class!r}"
            raise ConfigurationError(msg)
        if message_matcher is not None:
            require_matcher(message_matcher, "raises_error message matcher")

        expected_name = expected_class.__name__ if expected_class is not None else "an error"
        try:
            block()
        except Exception as e:
            logger.debug("block raised %s: %s", type(e).__name__, e)
            error = e
        else:
            raise MismatchError(
                self._labelled(f"expected block to raise {expected_name}, but no error was raised")
            )

        if expected_class is not None and not isinstance(error, expected_class):
            raise MismatchError(
                self._labelled(
                    f"expected block to raise {expected_name}, "
                    f"but raised {type(error).__name__}: {error}"
                ),
                actual=error,
            ) from error
        if message_matcher is not None and not message_matcher.matches(str(error)):
            raise MismatchError(
                self._labelled(
                    f"expected block to raise {expected_name} with message "
                    f"{message_matcher.description()}, but message was {str(error)!r}"
                ),
                matcher=message_matcher,
                actual=error,
            ) from error
        return error

    def raises_nothing(self) -> Any:
        """Assert that the block completes; returns what it returned."""
        block = self._require_block("raises_nothing")
        try:
            return block()
        except Exception as e:
            logger.debug("block raised %s: %s", type(e).__name__, e)
            raise MismatchError(
                self._labelled(
                    f"expected block not to raise an error, but raised {type(e).__name__}: {e}"
                ),
                actual=e,
            ) from e

    # ── helpers ───────────────────────────────────────────────────────────────

    def _labelled(self, failure: str) -> str:
        if self.message:
            return f"{self.message}: {failure}"
        return failure

    def _require_value(self, operation: str) -> None:
        if self.actual is UNSET:
            msg = f"{operation}() needs an actual value; this asserter is bound to a block"
            raise UsageError(msg)

    def _require_block(self, operation: str) -> Callable[[], Any]:
        if self.block is None:
            msg = f"{operation}() requires a block: use assert_that(block=...)"
            raise UsageError(msg)
        return self.block


def assert_that(
    actual: Any = UNSET,
    message: str | None = None,
    *,
    block: Callable[[], Any] | None = None,
) -> Asserter:
    """Start an assertion on ``actual`` or on ``block``.

    ``message`` labels failures as ``"<message>: <failure>"``.
    """
    return Asserter(actual, message, block)
