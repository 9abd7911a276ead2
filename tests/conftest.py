# tests/conftest.py
from __future__ import annotations

from collections.abc import Iterable

import pytest

from qnumtheory import rng, runtime


class ScriptedRandom:
    """RandomSource that replays a fixed list of values (checked against the range)."""

    def __init__(self, values: Iterable[int]):
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def rand(self, lo: int, hi: int) -> int:
        self.calls.append((lo, hi))
        if not self.values:
            raise AssertionError(f"unexpected rand({lo}, {hi}): script exhausted")
        v = self.values.pop(0)
        assert lo <= v <= hi, f"scripted value {v} outside [{lo}, {hi}]"
        return v


@pytest.fixture(autouse=True)
def _fresh_context():
    """Each test starts with library defaults and an unseeded random source."""
    runtime.reset()
    rng.reset()
    yield
    runtime.reset()
    rng.reset()


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Point the workspace at a temp dir (profiles are seeded on demand)."""
    monkeypatch.setenv("QNUMTHEORY_HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def scripted():
    return ScriptedRandom
