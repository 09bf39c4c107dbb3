"""Structural diff engine: explains why two composite values are not equal.

Only engaged when both sides are the same diffable kind:

| both sides     | entries produced                                      |
|----------------|-------------------------------------------------------|
| Mapping        | MissingKey, ExtraKey, KeyMismatch                     |
| list or tuple  | SizeMismatch, MissingIndex, ExtraIndex, IndexMismatch |
| str            | LengthMismatch, FirstDifference                       |

The diff is first-level only: a nested mismatch is reported with the whole
nested values, never recursed into. Output is advisory: it only feeds
``Equals.failure_message`` and never affects matching.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from minicrest._types import is_indexable, values_equal

# Strings shorter than this (on both sides) are legible from the plain
# expected/actual line and get no diff section.
STRING_DIFF_MIN_LENGTH = 20
# Characters of context shown on each side of the first string difference.
STRING_DIFF_CONTEXT = 10

# ═══════════════════════════════════════════════════════════════════════════════
# Diff entries
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class MissingKey:
    """Key present in expected only."""

    key: Any
    value: Any


@dataclass(frozen=True, slots=True)
class ExtraKey:
    """Key present in actual only."""

    key: Any
    value: Any


@dataclass(frozen=True, slots=True)
class KeyMismatch:
    """Key present on both sides with different values."""

    key: Any
    expected: Any
    actual: Any


@dataclass(frozen=True, slots=True)
class SizeMismatch:
    expected: int
    actual: int


@dataclass(frozen=True, slots=True)
class MissingIndex:
    """Index beyond the end of a shorter actual sequence."""

    index: int
    value: Any


@dataclass(frozen=True, slots=True)
class ExtraIndex:
    """Index beyond the end of a shorter expected sequence."""

    index: int
    value: Any


@dataclass(frozen=True, slots=True)
class IndexMismatch:
    index: int
    expected: Any
    actual: Any


@dataclass(frozen=True, slots=True)
class LengthMismatch:
    expected: int
    actual: int


@dataclass(frozen=True, slots=True)
class FirstDifference:
    """First differing character, with a context window from each string."""

    position: int
    expected: str
    actual: str


type DiffEntry = (
    MissingKey
    | ExtraKey
    | KeyMismatch
    | SizeMismatch
    | MissingIndex
    | ExtraIndex
    | IndexMismatch
    | LengthMismatch
    | FirstDifference
)

# ═══════════════════════════════════════════════════════════════════════════════
# Computing
# ═══════════════════════════════════════════════════════════════════════════════


def compute_diff(expected: Any, actual: Any) -> tuple[DiffEntry, ...]:
    """Compute diff entries between ``expected`` and ``actual``.

    Returns an empty tuple when the values are equal or not of the same
    diffable kind.
    """
    if isinstance(expected, Mapping) and isinstance(actual, Mapping):
        return _mapping_diff(expected, actual)
    if is_indexable(expected) and is_indexable(actual):
        return _sequence_diff(expected, actual)
    if isinstance(expected, str) and isinstance(actual, str):
        return _string_diff(expected, actual)
    return ()


def _mapping_diff(expected: Mapping[Any, Any], actual: Mapping[Any, Any]) -> tuple[DiffEntry, ...]:
    entries: list[DiffEntry] = [
        MissingKey(key, expected[key]) for key in expected if key not in actual
    ]
    entries.extend(ExtraKey(key, actual[key]) for key in actual if key not in expected)
    entries.extend(
        KeyMismatch(key, expected[key], actual[key])
        for key in actual
        if key in expected and not values_equal(expected[key], actual[key])
    )
    return tuple(entries)


def _sequence_diff(expected: Any, actual: Any) -> tuple[DiffEntry, ...]:
    entries: list[DiffEntry] = []
    if len(expected) != len(actual):
        entries.append(SizeMismatch(len(expected), len(actual)))

    for i in range(max(len(expected), len(actual))):
        if i >= len(actual):
            entries.append(MissingIndex(i, expected[i]))
        elif i >= len(expected):
            entries.append(ExtraIndex(i, actual[i]))
        elif not values_equal(expected[i], actual[i]):
            entries.append(IndexMismatch(i, expected[i], actual[i]))
    return tuple(entries)


def _string_diff(expected: str, actual: str) -> tuple[DiffEntry, ...]:
    if len(expected) < STRING_DIFF_MIN_LENGTH and len(actual) < STRING_DIFF_MIN_LENGTH:
        return ()

    entries: list[DiffEntry] = []
    if len(expected) != len(actual):
        entries.append(LengthMismatch(len(expected), len(actual)))

    position = _first_difference(expected, actual)
    if position is not None:
        start = max(0, position - STRING_DIFF_CONTEXT)
        end = position + STRING_DIFF_CONTEXT + 1
        entries.append(FirstDifference(position, expected[start:end], actual[start:end]))
    return tuple(entries)


def _first_difference(expected: str, actual: str) -> int | None:
    for i, (e, a) in enumerate(zip(expected, actual)):
        if e != a:
            return i
    if len(expected) != len(actual):
        return min(len(expected), len(actual))
    return None


# ═══════════════════════════════════════════════════════════════════════════════
# Rendering
# ═══════════════════════════════════════════════════════════════════════════════


def format_diff(entries: tuple[DiffEntry, ...]) -> str | None:
    """Render diff entries as a ``Diff:`` section, or None if there are none."""
    if not entries:
        return None
    lines = ["Diff:"]
    for entry in entries:
        lines.extend(_render_entry(entry))
    return "\n".join(lines)


def _render_entry(entry: DiffEntry) -> list[str]:
    match entry:
        case MissingKey(key=k, value=v):
            return [f"  missing key {k!r}: {v!r}"]
        case ExtraKey(key=k, value=v):
            return [f"  extra key {k!r}: {v!r}"]
        case KeyMismatch(key=k, expected=e, actual=a):
            return [f"  key {k!r}:", f"    expected: {e!r}", f"    actual:   {a!r}"]
        case SizeMismatch(expected=e, actual=a):
            return [f"  size mismatch: expected {e} elements, got {a}"]
        case MissingIndex(index=i, value=v):
            return [f"  missing [{i}]: {v!r}"]
        case ExtraIndex(index=i, value=v):
            return [f"  extra [{i}]: {v!r}"]
        case IndexMismatch(index=i, expected=e, actual=a):
            return [f"  [{i}]:", f"    expected: {e!r}", f"    actual:   {a!r}"]
        case LengthMismatch(expected=e, actual=a):
            return [f"  length mismatch: expected {e} chars, got {a}"]
        case FirstDifference(position=p, expected=e, actual=a):
            return [
                f"  first difference at position {p}:",
                f"    expected: ...{e!r}...",
                f"    actual:   ...{a!r}...",
            ]
    return []  # pragma: no cover
