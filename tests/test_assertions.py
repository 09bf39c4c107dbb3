"""Tests for the Assertions mixin."""

from __future__ import annotations

import unittest
from typing import Any

import pytest

from minicrest import (
    BUILTIN_FACTORIES,
    Assertions,
    Equals,
    Matcher,
    MatcherRegistry,
    MismatchError,
    UnknownMatcherError,
    register_matcher,
)


class Positive(Matcher):
    __slots__ = ()

    def matches(self, actual: Any, /) -> bool:
        return isinstance(actual, (int, float)) and actual > 0

    def description(self) -> str:
        return "positive"


class TestMixin(Assertions):
    def test_assert_that_and_factories(self) -> None:
        assert self.assert_that([1, 2, 3]).matches(self.all_items(self.is_greater_than(0)))
        assert self.assert_that("hello").matches(self.starts_with("he") & self.ends_with("lo"))

    def test_every_builtin_is_a_method(self) -> None:
        for name in BUILTIN_FACTORIES:
            assert callable(getattr(self, name))

    def test_factories_build_matchers(self) -> None:
        assert self.equals(1) == Equals(1)

    def test_block_assertions(self) -> None:
        error = self.assert_that(block=lambda: int("x")).raises_error(ValueError)
        assert "invalid literal" in str(error)

    def test_failure(self) -> None:
        with pytest.raises(MismatchError, match="label: expected 1"):
            self.assert_that(1, "label").equals(2)

    def test_registered_matcher_resolves(self, unique_name: str) -> None:
        register_matcher(unique_name, Positive)
        assert self.assert_that(3).matches(getattr(self, unique_name)())

    def test_unknown_name(self) -> None:
        with pytest.raises(UnknownMatcherError):
            self.not_a_matcher()  # type: ignore[attr-defined]

    def test_private_names_not_dispatched(self) -> None:
        assert hasattr(self, "_missing_helper") is False


class ScopedAssertions(Assertions):
    registry = MatcherRegistry()


ScopedAssertions.registry.register("positive", Positive)


class TestScopedRegistry(ScopedAssertions):
    def test_uses_class_registry(self) -> None:
        assert self.assert_that(5).matches(self.positive())

    def test_builtins_still_available(self) -> None:
        assert self.assert_that(5).equals(5)


class UnittestCase(Assertions, unittest.TestCase):
    def test_with_unittest(self) -> None:
        self.assert_that({"a": 1}).matches(self.has_key("a"))
        with self.assertRaises(AssertionError):
            self.assert_that({"a": 1}).matches(self.has_key("b"))
