"""
Meowbrain - Motivation
Drives (rest, stimulation, exploration) that grow over time and are relieved
by matching behaviors.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from typing import Any

from ...constants import (
    DEFAULT_EXPLORATION_DECAY,
    DEFAULT_INITIAL_EXPLORATION,
    DEFAULT_INITIAL_REST,
    DEFAULT_INITIAL_STIMULATION,
    DEFAULT_REST_DECAY,
    DEFAULT_STIMULATION_DECAY,
    MOTIVATION_MAX,
    MOTIVATION_MIN,
)
from ..behavior.behavior import BehaviorType


DRIVE_NAMES: tuple[str, ...] = ("rest", "stimulation", "exploration")

# Per-second change applied while a behavior is active.
# Negative values satisfy a drive, positive values build it up.
BEHAVIOR_EFFECTS: dict[BehaviorType, dict[str, float]] = {
    BehaviorType.RESTING: {"rest": -0.1, "stimulation": 0.05},  # bored while resting
    BehaviorType.PLAYING: {"stimulation": -0.15, "rest": 0.08},  # tiring
    BehaviorType.EXPLORING: {"exploration": -0.10, "stimulation": -0.05, "rest": 0.03},
    BehaviorType.WANDERING: {"stimulation": -0.03, "rest": 0.02},
    BehaviorType.OBSERVING: {"stimulation": -0.02, "exploration": 0.02},
    BehaviorType.APPROACHING: {"stimulation": -0.05, "rest": 0.01},
    BehaviorType.CONSUMING: {"rest": -0.15, "stimulation": -0.10},
}


def _clamp(value: float) -> float:
    return max(MOTIVATION_MIN, min(MOTIVATION_MAX, value))


@dataclass(frozen=True)
class Motivation:
    """
    Current drive levels, each clamped to [0, 1].

    Higher values mean a stronger unmet need. Values passed in outside the
    range are clamped on construction.
    """

    rest: float = DEFAULT_INITIAL_REST
    stimulation: float = DEFAULT_INITIAL_STIMULATION
    exploration: float = DEFAULT_INITIAL_EXPLORATION

    def __post_init__(self) -> None:
        for f in fields(self):
            object.__setattr__(self, f.name, _clamp(float(getattr(self, f.name))))

    def get_drive(self, name: str) -> float:
        """Get a drive value by name."""
        if name not in DRIVE_NAMES:
            raise ValueError(f"Unknown drive: {name}. Available: {list(DRIVE_NAMES)}")
        return getattr(self, name)

    def adjusted(self, **deltas: float) -> Motivation:
        """Return a copy with drives shifted by the given amounts (clamped)."""
        unknown = set(deltas) - set(DRIVE_NAMES)
        if unknown:
            raise ValueError(f"Unknown drives: {sorted(unknown)}")
        values = self.get_state()
        for name, delta in deltas.items():
            values[name] += delta
        return Motivation(**values)

    def most_pressing(self) -> str:
        """Name of the strongest drive."""
        return max(DRIVE_NAMES, key=self.get_drive)

    def get_state(self) -> dict[str, float]:
        """Get serializable state for persistence."""
        return asdict(self)

    @classmethod
    def from_state(cls, state: Mapping[str, Any]) -> Motivation:
        """Create a Motivation from saved state."""
        return cls(
            rest=state.get("rest", DEFAULT_INITIAL_REST),
            stimulation=state.get("stimulation", DEFAULT_INITIAL_STIMULATION),
            exploration=state.get("exploration", DEFAULT_INITIAL_EXPLORATION),
        )

    def summary(self) -> dict[str, float]:
        return {name: round(getattr(self, name), 3) for name in DRIVE_NAMES}

    def __str__(self) -> str:
        return (
            f"Motivation(rest={self.rest:.2f}, stimulation={self.stimulation:.2f}, "
            f"exploration={self.exploration:.2f})"
        )


@dataclass(frozen=True)
class DecayRates:
    """Per-second growth of each drive, independent of behavior."""

    rest: float = DEFAULT_REST_DECAY
    stimulation: float = DEFAULT_STIMULATION_DECAY
    exploration: float = DEFAULT_EXPLORATION_DECAY

    def get_state(self) -> dict[str, float]:
        return asdict(self)


def advance_motivation(
    motivation: Motivation,
    current_behavior: BehaviorType,
    delta_seconds: float,
    decay_rates: DecayRates,
) -> Motivation:
    """
    Advance drives by elapsed time and the effects of the active behavior.

    Ambient growth and behavior effects add together; the result is clamped
    to [0, 1]. The input is never modified.

    Args:
        motivation: Drive levels before this tick
        current_behavior: Behavior active during the elapsed time
        delta_seconds: Elapsed time in seconds (negative treated as 0)
        decay_rates: Ambient per-second growth of each drive

    Returns:
        New Motivation
    """
    dt = max(0.0, delta_seconds)
    values = {
        name: getattr(motivation, name) + getattr(decay_rates, name) * dt
        for name in DRIVE_NAMES
    }

    for name, rate in BEHAVIOR_EFFECTS.get(current_behavior, {}).items():
        values[name] += rate * dt

    return Motivation(**values)
