"""Tests for the fluent assertion entry point."""

from __future__ import annotations

import logging

import pytest

from minicrest import (
    Asserter,
    ConfigurationError,
    MismatchError,
    UsageError,
    assert_that,
    equals,
    is_greater_than,
    matches_pattern,
    starts_with,
)


class LookupFailure(Exception):
    pass


class MissingRecord(LookupFailure):
    pass


def _raise(error: Exception) -> None:
    raise error


class TestBinding:
    def test_value_binding(self) -> None:
        asserter = assert_that(5)
        assert isinstance(asserter, Asserter)
        assert asserter.actual == 5

    def test_none_is_a_value(self) -> None:
        assert assert_that(None).equals(None) is True

    def test_both_value_and_block_rejected(self) -> None:
        with pytest.raises(UsageError, match="not both"):
            assert_that(1, block=lambda: None)

    def test_neither_rejected(self) -> None:
        with pytest.raises(UsageError):
            assert_that()

    def test_non_callable_block_rejected(self) -> None:
        with pytest.raises(UsageError):
            assert_that(block=5)  # type: ignore[arg-type]

    def test_usage_error_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            assert_that()


class TestValueOperations:
    def test_matches_returns_true(self) -> None:
        assert assert_that(5).matches(is_greater_than(3)) is True

    def test_matches_failure_raises_mismatch(self) -> None:
        with pytest.raises(MismatchError) as exc_info:
            assert_that(1).matches(is_greater_than(3))
        assert str(exc_info.value) == "expected 1 to be greater than 3"
        assert exc_info.value.actual == 1
        assert exc_info.value.matcher == is_greater_than(3)

    def test_mismatch_is_assertion_error(self) -> None:
        with pytest.raises(AssertionError):
            assert_that(1).equals(2)

    def test_message_prefix(self) -> None:
        with pytest.raises(MismatchError) as exc_info:
            assert_that(1, "user count").equals(2)
        assert str(exc_info.value) == "user count: expected 1\n      to equal 2"

    def test_equals_with_diff(self) -> None:
        with pytest.raises(MismatchError, match="Diff:"):
            assert_that({"a": 1}).equals({"a": 2})

    def test_is(self) -> None:
        obj = object()
        assert assert_that(obj).is_(obj) is True
        with pytest.raises(MismatchError, match="to be the same object as"):
            assert_that(object()).is_(obj)

    def test_never(self) -> None:
        assert assert_that("hello").never(starts_with("x")) is True
        with pytest.raises(MismatchError) as exc_info:
            assert_that("hello").never(starts_with("he"))
        assert str(exc_info.value) == (
            "expected 'hello'\n      not to start with 'he'\nbut it does"
        )

    def test_non_matcher_argument(self) -> None:
        with pytest.raises(ConfigurationError):
            assert_that(1).matches(1)  # type: ignore[arg-type]

    def test_value_operation_on_block_rejected(self) -> None:
        with pytest.raises(UsageError, match="bound to a block"):
            assert_that(block=lambda: 1).equals(1)

    def test_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="minicrest"):
            with pytest.raises(MismatchError):
                assert_that(1).matches(is_greater_than(3))
        assert "assertion failed: expected greater than 3" in caplog.text


class TestRaisesError:
    def test_returns_raised_error(self) -> None:
        error = ValueError("bad")
        assert assert_that(block=lambda: _raise(error)).raises_error(ValueError) is error

    def test_any_error_by_default(self) -> None:
        caught = assert_that(block=lambda: _raise(KeyError("k"))).raises_error()
        assert isinstance(caught, KeyError)

    def test_subclass_accepted(self) -> None:
        caught = assert_that(block=lambda: _raise(MissingRecord("id 7"))).raises_error(
            LookupFailure
        )
        assert isinstance(caught, MissingRecord)

    def test_no_error_raised(self) -> None:
        with pytest.raises(MismatchError) as exc_info:
            assert_that(block=lambda: None).raises_error(ValueError)
        assert str(exc_info.value) == (
            "expected block to raise ValueError, but no error was raised"
        )

    def test_no_error_raised_without_class(self) -> None:
        with pytest.raises(MismatchError) as exc_info:
            assert_that(block=lambda: None).raises_error()
        assert str(exc_info.value) == (
            "expected block to raise an error, but no error was raised"
        )

    def test_wrong_class(self) -> None:
        with pytest.raises(MismatchError) as exc_info:
            assert_that(block=lambda: _raise(TypeError("nope"))).raises_error(ValueError)
        assert str(exc_info.value) == (
            "expected block to raise ValueError, but raised TypeError: nope"
        )

    def test_message_matcher(self) -> None:
        asserter = assert_that(block=lambda: _raise(ValueError("invalid id 42")))
        assert isinstance(asserter.raises_error(ValueError, matches_pattern(r"id \d+")), ValueError)

    def test_message_mismatch(self) -> None:
        with pytest.raises(MismatchError) as exc_info:
            assert_that(block=lambda: _raise(ValueError("bad"))).raises_error(
                ValueError, equals("good")
            )
        assert str(exc_info.value) == (
            "expected block to raise ValueError with message equal to 'good', "
            "but message was 'bad'"
        )

    def test_message_prefix(self) -> None:
        with pytest.raises(MismatchError) as exc_info:
            assert_that(message="parsing", block=lambda: None).raises_error()
        assert str(exc_info.value).startswith("parsing: expected block to raise")

    def test_base_exceptions_propagate(self) -> None:
        with pytest.raises(KeyboardInterrupt):
            assert_that(block=lambda: _raise(KeyboardInterrupt())).raises_error()

    def test_requires_block(self) -> None:
        with pytest.raises(UsageError, match="requires a block"):
            assert_that(1).raises_error(ValueError)

    def test_rejects_non_exception_class(self) -> None:
        with pytest.raises(ConfigurationError):
            assert_that(block=lambda: None).raises_error(int)  # type: ignore[arg-type]


class TestRaisesNothing:
    def test_returns_block_result(self) -> None:
        assert assert_that(block=lambda: 42).raises_nothing() == 42

    def test_error_raised(self) -> None:
        with pytest.raises(MismatchError) as exc_info:
            assert_that(block=lambda: _raise(RuntimeError("boom"))).raises_nothing()
        assert str(exc_info.value) == (
            "expected block not to raise an error, but raised RuntimeError: boom"
        )
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_requires_block(self) -> None:
        with pytest.raises(UsageError):
            assert_that(1).raises_nothing()
