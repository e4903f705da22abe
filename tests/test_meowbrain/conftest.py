"""Shared fixtures for meowbrain tests."""

from __future__ import annotations

from collections.abc import Iterable

import pytest

from meowbrain.cognition.behavior import SAMPLED_BEHAVIORS, BehaviorType, BehaviorWeights


class ScriptedRandom:
    """Random source that replays fixed values (cycling)."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values = list(values)
        self._index = 0

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value

    def push(self, *values: float) -> None:
        """Replace the script."""
        self._values = list(values)
        self._index = 0


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def draw_for(weights: BehaviorWeights, behavior: BehaviorType) -> float:
    """
    A random() value that makes the selector land in the middle of
    behavior's slice of the weight total.
    """
    pool = [(b, w) for b, w in weights.items() if b in SAMPLED_BEHAVIORS and w > 0]
    total = sum(w for _, w in pool)
    start = 0.0
    for b, w in pool:
        if b is behavior:
            return (start + w / 2) / total
        start += w
    raise AssertionError(f"{behavior} has no weight")


@pytest.fixture
def scripted_random():
    """Random source returning 0.5 until re-scripted."""
    return ScriptedRandom([0.5])


@pytest.fixture
def make_random():
    """Factory for random sources replaying given values."""
    return lambda *values: ScriptedRandom(values)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def draw():
    """Helper that picks a random() value selecting a given behavior."""
    return draw_for
