"""
Meowbrain - Behavior Evaluator
Weighted behavior scoring and probabilistic selection.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any, Protocol, Union

from ...constants import (
    BOUNDARY_STRESS_THRESHOLD,
    RECENT_BEHAVIOR_PENALTY,
    RECENT_BEHAVIOR_WINDOW,
)
from .behavior import ALL_BEHAVIORS, SAMPLED_BEHAVIORS, BehaviorType

if TYPE_CHECKING:
    from ..memory.short_term_memory import Memory
    from ..needs.motivation import Motivation
    from ..needs.personality import Personality
    from .context import Environment


class RandomSource(Protocol):
    """Anything with a random() -> float in [0, 1), e.g. random.Random."""

    def random(self) -> float: ...


@dataclass(frozen=True)
class BehaviorWeights:
    """
    Non-negative weight per behavior, recomputed every decision cycle.

    Field order matches BehaviorType declaration order.
    """

    wandering: float = 0.0
    resting: float = 0.0
    playing: float = 0.0
    observing: float = 0.0
    exploring: float = 0.0
    approaching: float = 0.0
    consuming: float = 0.0

    @classmethod
    def from_mapping(cls, weights: Mapping[Union[BehaviorType, str], float]) -> BehaviorWeights:
        """Build weights from a behavior -> weight mapping (missing = 0)."""
        values = {BehaviorType.parse(k).value: float(v) for k, v in weights.items()}
        return cls(**values)

    def get(self, behavior: BehaviorType) -> float:
        return getattr(self, behavior.value)

    def items(self) -> Iterator[tuple[BehaviorType, float]]:
        """(behavior, weight) pairs in declaration order."""
        for behavior in ALL_BEHAVIORS:
            yield behavior, self.get(behavior)

    def total(self) -> float:
        return sum(weight for _, weight in self.items())

    def probabilities(self) -> dict[BehaviorType, float]:
        """Selection probability of each behavior (all 0 if total is 0)."""
        total = self.total()
        if total <= 0:
            return {behavior: 0.0 for behavior in ALL_BEHAVIORS}
        return {behavior: weight / total for behavior, weight in self.items()}

    def ranked(self) -> list[tuple[BehaviorType, float]]:
        """Behaviors sorted by weight, highest first."""
        return sorted(self.items(), key=lambda item: item[1], reverse=True)

    def summary(self) -> dict[str, float]:
        """Get a summary for logging/debugging."""
        return {f.name: round(getattr(self, f.name), 3) for f in fields(self)}

    def __str__(self) -> str:
        parts = ", ".join(f"{b.value}={w:.2f}" for b, w in self.items() if w > 0)
        return f"BehaviorWeights({parts})"


def compute_weights(
    personality: Personality,
    motivation: Motivation,
    memory: Memory,
    environment: Environment,
) -> BehaviorWeights:
    """
    Score every sampled behavior for the current decision cycle.

    The score is a linear combination:
        personality baseline + motivation pressure
    followed by multiplicative recency and obstacle penalties, additive
    attractor and boundary-stress bonuses, and a final clamp at 0.
    approaching and consuming are always 0 here; they are only entered
    through need responses.

    Args:
        personality: Static traits
        motivation: Current drive levels
        memory: Recent history
        environment: World snapshot

    Returns:
        BehaviorWeights
    """
    p = personality
    weights: dict[BehaviorType, float] = {behavior: 0.0 for behavior in ALL_BEHAVIORS}

    # Personality baseline
    weights[BehaviorType.WANDERING] = p.energy * 0.5 + p.independence * 0.3
    weights[BehaviorType.RESTING] = (1 - p.energy) * 0.7
    weights[BehaviorType.PLAYING] = p.playfulness * 0.8 + p.energy * 0.2
    weights[BehaviorType.OBSERVING] = p.curiosity * 0.4 + (1 - p.energy) * 0.3
    weights[BehaviorType.EXPLORING] = p.curiosity * 0.7 + p.energy * 0.3

    # Motivation pressure (unmet rest dominates)
    weights[BehaviorType.RESTING] += motivation.rest * 2.0
    weights[BehaviorType.PLAYING] += motivation.stimulation * 1.5
    weights[BehaviorType.EXPLORING] += motivation.exploration * 1.5
    weights[BehaviorType.WANDERING] += motivation.stimulation * 0.5

    # Recency penalty, compounding for repeats
    for behavior in memory.recent_behaviors(RECENT_BEHAVIOR_WINDOW):
        weights[behavior] *= RECENT_BEHAVIOR_PENALTY

    if environment.has_attractors:
        weights[BehaviorType.EXPLORING] += 0.5
        weights[BehaviorType.WANDERING] += 0.3

    if environment.has_obstacles:
        weights[BehaviorType.WANDERING] *= 0.8

    # Repeated collisions push toward calmer behaviors
    if memory.boundary_hits > BOUNDARY_STRESS_THRESHOLD:
        weights[BehaviorType.RESTING] += 0.5
        weights[BehaviorType.OBSERVING] += 0.3
        weights[BehaviorType.WANDERING] *= 0.6

    return BehaviorWeights(**{b.value: max(0.0, w) for b, w in weights.items()})


def select_behavior(
    weights: BehaviorWeights | Mapping[Union[BehaviorType, str], float],
    rng: RandomSource | None = None,
    candidates: Iterable[BehaviorType] = SAMPLED_BEHAVIORS,
) -> BehaviorType:
    """
    Pick one behavior by weighted random sampling.

    Draws r uniformly from [0, total) and walks candidates in declaration
    order, subtracting each weight until r <= 0. Need-driven behaviors are
    not candidates by default, so they are never chosen here even if a
    caller gives them weight.

    Args:
        weights: Weight per behavior
        rng: Random source; a fresh random.Random if None
        candidates: Behaviors eligible for selection

    Returns:
        The chosen behavior, or wandering if every candidate weight is 0
    """
    if not isinstance(weights, BehaviorWeights):
        weights = BehaviorWeights.from_mapping(weights)

    allowed = set(candidates)
    pool = [
        (behavior, weight)
        for behavior, weight in weights.items()
        if behavior in allowed and weight > 0
    ]
    total = sum(weight for _, weight in pool)

    if total <= 0:
        return BehaviorType.WANDERING

    rng = rng or random.Random()
    remainder = rng.random() * total

    for behavior, weight in pool:
        remainder -= weight
        if remainder <= 0:
            return behavior

    # Floating point leftovers land on the last candidate
    return pool[-1][0]


def describe_weights(weights: BehaviorWeights) -> list[dict[str, Any]]:
    """Ranked weights with probabilities, for dashboards and logs."""
    probabilities = weights.probabilities()
    return [
        {
            "name": behavior.value,
            "weight": round(weight, 3),
            "probability": round(probabilities[behavior], 3),
        }
        for behavior, weight in weights.ranked()
    ]
