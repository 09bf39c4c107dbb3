"""Matcher registry: named factories for project-specific matchers.

A registry maps a name to a factory (any callable returning a Matcher).
Registered names become reachable the same way the built-in factories are::

    register_matcher("is_even", lambda: IsEven())

    from minicrest import assert_that
    import minicrest

    assert_that(4).matches(minicrest.is_even())

Registration is append-only. A name can be registered once per registry.
``default_registry`` reserves the built-in factory names and every other
public attribute of the ``minicrest`` module and the Assertions mixin. The
check-then-insert runs under a lock, so concurrent registration of the same
name lets exactly one caller win.
"""

from __future__ import annotations

import keyword
import logging
import threading
from typing import TYPE_CHECKING, Any

from minicrest._factories import BUILTIN_FACTORIES
from minicrest._matcher import ConfigurationError, Matcher

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)

type MatcherFactory = Callable[..., Matcher]


class DuplicateMatcherError(ConfigurationError):
    """A matcher name was registered twice, or collides with a reserved name."""

    def __init__(self, name: str, *, reserved: bool = False) -> None:
        self.name = name
        self.reserved = reserved
        if reserved:
            msg = f"matcher {name!r} already registered: the name is reserved"
        else:
            msg = f"matcher {name!r} already registered"
        super().__init__(msg)


class UnknownMatcherError(ConfigurationError, AttributeError):
    """No factory is registered under the requested name."""

    def __init__(self, name: str, available: Iterable[str]) -> None:
        self.name = name
        self.available = sorted(available)
        if self.available:
            msg = (
                f"unknown matcher: {name!r} "
                f"(registered: {', '.join(self.available)})"
            )
        else:
            msg = f"unknown matcher: {name!r} (no matchers are registered)"
        super().__init__(msg)


class MatcherRegistry:
    """Append-only table of named matcher factories.

    Args:
        reserved: Names that may never be registered, typically the
            built-in factory names.
    """

    def __init__(self, reserved: Iterable[str] = ()) -> None:
        self._factories: dict[str, MatcherFactory] = {}
        self._reserved = frozenset(reserved)
        self._lock = threading.Lock()

    def register(self, name: str, factory: MatcherFactory | None = None) -> None:
        """Register ``factory`` under ``name``.

        Raises:
            ConfigurationError: If ``factory`` is missing or not callable, or
                ``name`` is not a valid Python identifier.
            DuplicateMatcherError: If ``name`` is already registered or
                reserved.
        """
        if factory is None or not callable(factory):
            msg = f"factory required to register matcher {name!r}"
            raise ConfigurationError(msg)
        if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
            msg = f"matcher name must be a valid identifier, got {name!r}"
            raise ConfigurationError(msg)
        if name.startswith("_"):
            msg = f"matcher name must not start with an underscore, got {name!r}"
            raise ConfigurationError(msg)

        with self._lock:
            if name in self._reserved:
                raise DuplicateMatcherError(name, reserved=True)
            if name in self._factories:
                raise DuplicateMatcherError(name)
            self._factories[name] = factory
        logger.debug("registered matcher %r", name)

    def reserve(self, names: Iterable[str]) -> None:
        """Forbid registering ``names`` from now on.

        Raises:
            DuplicateMatcherError: If one of ``names`` is already registered.
        """
        names = frozenset(names)
        with self._lock:
            clashes = sorted(names & self._factories.keys())
            if clashes:
                raise DuplicateMatcherError(clashes[0])
            self._reserved |= names

    def create(self, name: str, *args: Any, **kwargs: Any) -> Matcher:
        """Build a matcher with the factory registered under ``name``.

        Raises:
            UnknownMatcherError: If nothing is registered under ``name``.
            ConfigurationError: If the factory returns something other
                than a Matcher.
        """
        try:
            factory = self._factories[name]
        except KeyError:
            raise UnknownMatcherError(name, self._factories) from None
        matcher = factory(*args, **kwargs)
        if not isinstance(matcher, Matcher):
            msg = (
                f"factory for matcher {name!r} must return a Matcher, "
                f"got {type(matcher).__name__}"
            )
            raise ConfigurationError(msg)
        return matcher

    def factory(self, name: str) -> Callable[..., Matcher]:
        """A callable that builds ``name`` matchers through ``create``."""
        if name not in self._factories:
            raise UnknownMatcherError(name, self._factories)

        def build(*args: Any, **kwargs: Any) -> Matcher:
            return self.create(name, *args, **kwargs)

        build.__name__ = name
        build.__qualname__ = name
        return build

    def names(self) -> list[str]:
        """Registered names, sorted."""
        return sorted(self._factories)

    def __getattr__(self, name: str) -> Callable[..., Matcher]:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.factory(name)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def __repr__(self) -> str:
        return f"MatcherRegistry(names={self.names()!r})"


default_registry = MatcherRegistry(reserved=BUILTIN_FACTORIES)


def register_matcher(name: str, factory: MatcherFactory | None = None) -> None:
    """Register a matcher factory in the default registry."""
    default_registry.register(name, factory)
