"""Matcher benchmarks for minicrest.

Measures the hot paths: deep equality on nested composites, multiset
containment, combinator trees, and failure-message rendering with a
structural diff.

Run: pytest tests/bench/test_bench_matchers.py --benchmark-only
"""

from __future__ import annotations

from minicrest import (
    all_items,
    all_of,
    contains,
    equals,
    is_a,
    is_greater_than,
    is_less_than,
    matches_pattern,
    never,
    some_of,
)

# ── Test fixtures ────────────────────────────────────────────────────────────


def nested_record(n: int) -> dict[str, object]:
    return {
        "id": n,
        "tags": [f"tag-{i}" for i in range(10)],
        "owner": {"name": f"user-{n}", "active": True, "scores": [n, n + 1, n + 2]},
    }


RECORDS = [nested_record(i) for i in range(100)]
RECORDS_CHANGED = [*RECORDS[:-1], nested_record(-1)]


# ── Equality ─────────────────────────────────────────────────────────────────


def test_bench_equals_nested_hit(benchmark):
    matcher = equals(RECORDS)
    benchmark(matcher.matches, [nested_record(i) for i in range(100)])


def test_bench_equals_nested_miss(benchmark):
    matcher = equals(RECORDS)
    benchmark(matcher.matches, RECORDS_CHANGED)


def test_bench_equals_failure_message_with_diff(benchmark):
    matcher = equals({f"key-{i}": i for i in range(200)})
    actual = {f"key-{i}": i + (i % 7 == 0) for i in range(200)}
    benchmark(matcher.failure_message, actual)


# ── Containment ──────────────────────────────────────────────────────────────


def test_bench_contains_any_order(benchmark):
    matcher = contains(*range(200))
    benchmark(matcher.matches, list(reversed(range(200))))


def test_bench_contains_unhashable(benchmark):
    matcher = contains(*([i] for i in range(100)))
    benchmark(matcher.matches, [[i] for i in reversed(range(100))])


# ── Composition ──────────────────────────────────────────────────────────────


def test_bench_combinator_tree(benchmark):
    matcher = all_of(
        is_a(int),
        some_of(is_less_than(0), is_greater_than(10)),
        never(equals(42)),
    )
    benchmark(matcher.matches, 100)


def test_bench_all_items_regex(benchmark):
    matcher = all_items(matches_pattern(r"^tag-\d+$"))
    benchmark(matcher.matches, [f"tag-{i}" for i in range(1000)])
