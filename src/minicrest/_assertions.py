"""Assertions mixin for class-based tests.

Mix into a test class to call ``assert_that`` and every factory as a
method, without importing each one::

    class TestCart(Assertions):
        def test_totals(self) -> None:
            self.assert_that(cart.items).matches(self.has_size(3))

Registered matchers resolve as methods too, looked up in ``registry`` at
call time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from minicrest._asserter import UNSET, Asserter, assert_that
from minicrest._factories import BUILTIN_FACTORIES
from minicrest._registry import MatcherRegistry, default_registry

if TYPE_CHECKING:
    from collections.abc import Callable

    from minicrest._matcher import Matcher


class Assertions:
    """Provides ``assert_that`` and the matcher factories as methods."""

    registry: ClassVar[MatcherRegistry] = default_registry

    def assert_that(
        self,
        actual: Any = UNSET,
        message: str | None = None,
        *,
        block: Callable[[], Any] | None = None,
    ) -> Asserter:
        return assert_that(actual, message, block=block)

    def __getattr__(self, name: str) -> Callable[..., Matcher]:
        if name.startswith("_"):
            raise AttributeError(name)
        return type(self).registry.factory(name)


for _name, _factory in BUILTIN_FACTORIES.items():
    setattr(Assertions, _name, staticmethod(_factory))
del _name, _factory

default_registry.reserve(name for name in dir(Assertions) if not name.startswith("_"))
