"""Value model shared by the matchers and the diff engine.

Shape-polymorphic matchers (Includes, Contains, IsIn, quantifiers) do not
probe capabilities at runtime. They classify the actual value once into the
closed Shape variant and take exactly one branch per tag:

| Shape    | Python values                                         |
|----------|-------------------------------------------------------|
| TEXT     | str                                                   |
| MAPPING  | collections.abc.Mapping                               |
| SEQUENCE | any other sized iterable (list, tuple, set, range...) |
| SCALAR   | everything else (numbers, None, bytes, objects)       |
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable, Mapping, Sized
from typing import Any


class Shape(enum.Enum):
    """Closed classification of a value for shape-based dispatch."""

    TEXT = "text"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


# Entry quantifier predicate: (key, value) -> bool.
type EntryPredicate = Callable[[Any, Any], bool]


def shape_of(value: Any) -> Shape:
    """Classify a value into its Shape tag."""
    if isinstance(value, str):
        return Shape.TEXT
    if isinstance(value, Mapping):
        return Shape.MAPPING
    if isinstance(value, (bytes, bytearray)):
        return Shape.SCALAR
    if isinstance(value, Iterable) and isinstance(value, Sized):
        return Shape.SEQUENCE
    return Shape.SCALAR


def is_indexable(value: Any) -> bool:
    """True for ordered, index-addressable sequences (list and tuple)."""
    return isinstance(value, (list, tuple))


def values_equal(a: Any, b: Any) -> bool:
    """Deep structural equality.

    - None equals only None.
    - A bool equals only a bool of the same value (False != 0, True != 1).
    - Mappings compare by key set, then value-by-value, recursively. A bool
      key never pairs with an equal int key.
    - Lists and tuples compare element-wise, recursively.
    - Everything else falls back to ``==``.
    """
    if a is b:
        return True
    if a is None or b is None:
        return False
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if a.keys() != b.keys() or _bool_keys(a) != _bool_keys(b):
            return False
        return all(values_equal(a[k], b[k]) for k in a)
    if is_indexable(a) and is_indexable(b):
        if len(a) != len(b):
            return False
        return all(values_equal(x, y) for x, y in zip(a, b, strict=True))
    if isinstance(a, Mapping) or isinstance(b, Mapping):
        return False
    if is_indexable(a) or is_indexable(b):
        return False
    try:
        return bool(a == b)
    except Exception:  # noqa: BLE001 - user __eq__ may raise
        return False


def _bool_keys(mapping: Mapping[Any, Any]) -> set[bool]:
    return {k for k in mapping if isinstance(k, bool)}


def contains_value(collection: Iterable[Any], item: Any) -> bool:
    """True if any element of ``collection`` is values_equal to ``item``."""
    return any(values_equal(element, item) for element in collection)


def multiset_difference(left: Iterable[Any], right: Iterable[Any]) -> list[Any]:
    """Elements of ``left`` not paired with an equal element of ``right``.

    Each element of ``right`` pairs with at most one element of ``left``,
    so duplicate counts are respected. Works for unhashable elements.
    """
    remaining = list(right)
    leftover = []
    for item in left:
        for i, candidate in enumerate(remaining):
            if values_equal(item, candidate):
                del remaining[i]
                break
        else:
            leftover.append(item)
    return leftover


def flatten(items: Iterable[Any]) -> tuple[Any, ...]:
    """Flatten nested lists/tuples into a single tuple, preserving order."""
    flat: list[Any] = []
    for item in items:
        if isinstance(item, (list, tuple)):
            flat.extend(flatten(item))
        else:
            flat.append(item)
    return tuple(flat)
