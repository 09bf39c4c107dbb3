"""Tests for equality, identity, type and capability matchers."""

from __future__ import annotations

from collections import OrderedDict
from types import SimpleNamespace

import pytest

from minicrest import (
    ConfigurationError,
    anything,
    descends_from,
    equals,
    falsy,
    has_attribute,
    instance_of,
    is_,
    is_a,
    is_none,
    never,
    responds_to,
    truthy,
)


class Animal:
    pass


class Dog(Animal):
    def bark(self) -> str:
        return "woof"


class TestEquals:
    def test_scalars(self) -> None:
        assert equals(42).matches(42) is True
        assert equals(42).matches(43) is False
        assert equals("a").matches("a") is True

    def test_int_and_float_compare_by_value(self) -> None:
        assert equals(1).matches(1.0) is True

    def test_bool_is_not_an_integer(self) -> None:
        assert equals(0).matches(False) is False
        assert equals(1).matches(True) is False
        assert equals(True).matches(True) is True

    def test_none_equals_only_none(self) -> None:
        assert equals(None).matches(None) is True
        assert equals(None).matches(0) is False
        assert equals(None).matches("") is False

    def test_nested_composites(self) -> None:
        value = {"a": [1, {"b": (2, 3)}], "c": None}
        assert equals(value).matches({"a": [1, {"b": [2, 3]}], "c": None}) is True
        assert equals(value).matches({"a": [1, {"b": [2, 4]}], "c": None}) is False

    def test_mapping_key_order_irrelevant(self) -> None:
        assert equals({"a": 1, "b": 2}).matches(OrderedDict([("b", 2), ("a", 1)])) is True

    def test_sequence_against_mapping(self) -> None:
        assert equals([1]).matches({0: 1}) is False

    @pytest.mark.parametrize(
        ("left", "right"),
        [
            ([1, 2], [1, 2]),
            ([1, 2], [2, 1]),
            ({"a": 1}, {"a": 1}),
            ({"a": 1}, {"a": 2}),
            ([0], [False]),
            ({"a": None}, {"a": 0}),
        ],
    )
    def test_symmetric(self, left: object, right: object) -> None:
        assert equals(left).matches(left) is True
        assert equals(left).matches(right) == equals(right).matches(left)

    def test_description(self) -> None:
        assert equals([1, 2]).description() == "equal to [1, 2]"

    def test_failure_message(self) -> None:
        assert equals("b").failure_message("a") == "expected 'a'\n      to equal 'b'"

    def test_negated_failure_message(self) -> None:
        assert (
            equals(5).negated_failure_message(5)
            == "expected 5\n  not to equal 5, but they are equal"
        )

    def test_uneq_user_type_does_not_raise(self) -> None:
        class Explosive:
            def __eq__(self, other: object) -> bool:
                raise RuntimeError("boom")

            __hash__ = object.__hash__

        assert equals(Explosive()).matches(Explosive()) is False


class TestIs:
    def test_identity(self) -> None:
        obj = [1]
        assert is_(obj).matches(obj) is True
        assert is_(obj).matches([1]) is False

    def test_description_includes_id(self) -> None:
        obj = object()
        assert is_(obj).description() == f"the same object as {obj!r} (id: {id(obj)})"

    def test_failure_message_includes_both_ids(self) -> None:
        expected, actual = [1], [1]
        message = is_(expected).failure_message(actual)
        assert f"(id: {id(actual)})" in message
        assert f"(id: {id(expected)})" in message
        assert "to be the same object as" in message

    def test_negated_failure_message(self) -> None:
        obj = [1]
        message = is_(obj).negated_failure_message(obj)
        assert message.endswith("but they are the same object")

    def test_delegates_to_matcher(self) -> None:
        m = is_(equals(1))
        assert m.matches(1) is True
        assert m.matches(2) is False
        assert m.description() == "equal to 1"
        assert m.failure_message(2) == equals(1).failure_message(2)

    def test_delegation_composes_with_never(self) -> None:
        assert never(is_(equals(1))).matches(2) is True


class TestAnything:
    @pytest.mark.parametrize("value", [None, 0, "", [], object()])
    def test_matches_everything(self, value: object) -> None:
        assert anything().matches(value) is True

    def test_negated_failure_message(self) -> None:
        assert anything().negated_failure_message(1) == (
            "expected 1 not to be anything, but everything is something"
        )


class TestNoneTruthyFalsy:
    def test_is_none(self) -> None:
        assert is_none().matches(None) is True
        assert is_none().matches(False) is False
        assert is_none().failure_message(0) == "expected 0 to be None"

    def test_truthy(self) -> None:
        assert truthy().matches(1) is True
        assert truthy().matches([0]) is True
        assert truthy().matches(0) is False
        assert truthy().matches("") is False

    def test_falsy(self) -> None:
        assert falsy().matches(None) is True
        assert falsy().matches([]) is True
        assert falsy().matches("x") is False
        assert falsy().failure_message("x") == "expected 'x' to be falsy"


class TestIsA:
    def test_subclasses_match(self) -> None:
        assert is_a(Animal).matches(Dog()) is True
        assert is_a(Dog).matches(Animal()) is False

    def test_tuple_of_types(self) -> None:
        m = is_a((int, str))
        assert m.matches("x") is True
        assert m.matches(1.5) is False
        assert m.description() == "an instance of int or str"

    def test_failure_message(self) -> None:
        assert is_a(str).failure_message(1) == (
            "expected 1 to be an instance of str, but was int"
        )

    def test_rejects_non_type(self) -> None:
        with pytest.raises(ConfigurationError, match="is_a requires a type"):
            is_a("str")


class TestInstanceOf:
    def test_exact_type_only(self) -> None:
        assert instance_of(Animal).matches(Animal()) is True
        assert instance_of(Animal).matches(Dog()) is False

    def test_bool_is_not_exactly_int(self) -> None:
        assert instance_of(int).matches(True) is False

    def test_failure_message(self) -> None:
        assert instance_of(int).failure_message("1") == (
            "expected '1' to be an exact instance of int, but was a str"
        )

    def test_rejects_non_type(self) -> None:
        with pytest.raises(ConfigurationError):
            instance_of(3)


class TestDescendsFrom:
    def test_class_hierarchy(self) -> None:
        assert descends_from(Animal).matches(Dog) is True
        assert descends_from(Animal).matches(Animal) is True
        assert descends_from(Dog).matches(Animal) is False

    def test_instances_do_not_match(self) -> None:
        assert descends_from(Animal).matches(Dog()) is False

    def test_failure_message_for_non_class(self) -> None:
        message = descends_from(Animal).failure_message(5)
        assert message.endswith("but it is not a class")

    def test_failure_message_lists_ancestors(self) -> None:
        message = descends_from(Dog).failure_message(Animal)
        assert message.startswith("expected Animal\n      to be a subclass of Dog")
        assert "but its ancestors are object" in message


class TestRespondsTo:
    def test_all_names_present(self) -> None:
        assert responds_to("bark").matches(Dog()) is True
        assert responds_to("bark", "__class__").matches(Dog()) is True

    def test_missing_name(self) -> None:
        m = responds_to("bark", "fetch")
        assert m.matches(Dog()) is False
        assert m.failure_message(Dog()).endswith("missing: 'fetch'")

    def test_nested_names_flattened(self) -> None:
        assert responds_to(["bark", ["__init__"]]).names == ("bark", "__init__")

    def test_requires_names(self) -> None:
        with pytest.raises(ConfigurationError):
            responds_to()
        with pytest.raises(ConfigurationError):
            responds_to(1)


class TestHasAttribute:
    def test_object_attribute(self) -> None:
        obj = SimpleNamespace(name="alice")
        assert has_attribute("name").matches(obj) is True
        assert has_attribute("age").matches(obj) is False

    def test_mapping_key(self) -> None:
        assert has_attribute("name").matches({"name": "alice"}) is True
        assert has_attribute("name").matches({}) is False

    def test_value_matcher(self) -> None:
        obj = SimpleNamespace(age=30)
        assert has_attribute("age", equals(30)).matches(obj) is True
        assert has_attribute("age", equals(31)).matches(obj) is False

    def test_failure_messages(self) -> None:
        obj = SimpleNamespace(age=30)
        assert has_attribute("name").failure_message(obj).endswith(
            "but it does not have 'name'"
        )
        assert has_attribute("age", equals(31)).failure_message(obj).endswith(
            "but 'age' was 30"
        )

    def test_negated_failure_message(self) -> None:
        assert has_attribute("x").negated_failure_message({"x": 1}) == (
            "expected {'x': 1} not to have attribute 'x', but it did"
        )

    def test_value_matcher_must_be_matcher(self) -> None:
        with pytest.raises(ConfigurationError):
            has_attribute("age", 30)

    def test_name_must_be_string(self) -> None:
        with pytest.raises(ConfigurationError, match="string name"):
            has_attribute(5)  # type: ignore[arg-type]
