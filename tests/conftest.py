"""Shared fixtures for the minicrest test suite.

Loads the YAML diff scenarios from tests/fixtures/ for parametrized testing
and provides isolated registries.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

from minicrest import MatcherRegistry

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

_names = itertools.count()


@dataclass
class DiffCase:
    """A single scenario from a diff fixture file."""

    fixture_name: str
    case_name: str
    expected: Any
    actual: Any
    lines: list[str] | None


# ─── YAML fixture loading ────────────────────────────────────────────────────


def load_diff_cases() -> list[DiffCase]:
    """Load every diff scenario from diff_cases.yaml (multiple documents)."""
    cases: list[DiffCase] = []
    with (FIXTURES_DIR / "diff_cases.yaml").open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            for case in doc["cases"]:
                cases.append(
                    DiffCase(
                        fixture_name=doc["name"],
                        case_name=case["name"],
                        expected=case["expected"],
                        actual=case["actual"],
                        lines=case["lines"],
                    )
                )
    return cases


# ─── Fixtures ────────────────────────────────────────────────────────────────


@pytest.fixture
def registry() -> MatcherRegistry:
    """A fresh, empty registry."""
    return MatcherRegistry()


@pytest.fixture
def unique_name() -> str:
    """A matcher name not yet used in the default registry."""
    return f"custom_matcher_{next(_names)}"
