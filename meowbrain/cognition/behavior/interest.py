"""
Meowbrain - Interest Evaluator
Scores how interested a cat is in a placed need (food, water) or toy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ...constants import INTEREST_DISTANCE_FALLOFF_PX
from .behavior import BehaviorType
from .context import Position

if TYPE_CHECKING:
    from ..needs.motivation import Motivation
    from ..needs.personality import Personality


TARGET_KINDS: tuple[str, ...] = ("food:basic", "food:fancy", "water", "yarn", "laser")

# Toy states that make yarn more exciting
MOVING_YARN_STATES = frozenset({"rolling", "dragging"})


@dataclass(frozen=True)
class InteractionTarget:
    """
    Something placed in the world that a cat may respond to.

    Attributes:
        kind: One of TARGET_KINDS
        position: Where the target is
        state: Optional toy state (e.g. "idle", "rolling")
        target_id: Host identifier, passed through untouched
    """

    kind: str
    position: Position
    state: str | None = None
    target_id: str | None = None

    def __post_init__(self) -> None:
        if self.kind not in TARGET_KINDS:
            raise ValueError(f"Unknown target kind: {self.kind}. Available: {list(TARGET_KINDS)}")

    @property
    def is_food(self) -> bool:
        return self.kind.startswith("food:")

    def get_state(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "position": self.position.get_state(),
            "state": self.state,
            "target_id": self.target_id,
        }


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


class InterestEvaluator:
    """
    Evaluates interest in interaction targets from personality and state.

    Returns values in [0, 1]; anything above the host's interest threshold
    (0.5 by default) counts as interested.
    """

    def __init__(self, personality: Personality) -> None:
        self._personality = personality

    @property
    def personality(self) -> Personality:
        return self._personality

    def update_personality(self, personality: Personality) -> None:
        """Use a new personality for future evaluations."""
        self._personality = personality

    def evaluate(
        self,
        target: InteractionTarget,
        current_behavior: BehaviorType,
        motivation: Motivation,
        position: Position,
    ) -> float:
        """
        Evaluate interest in a target.

        Toys (yarn, laser) depend on personality and toy state only.
        Food and water also depend on what the cat is doing, how tired it
        is and how far away the target is.

        Args:
            target: The need or toy
            current_behavior: What the cat is doing now
            motivation: Current drives
            position: Where the cat is now

        Returns:
            Interest level in [0, 1]
        """
        p = self._personality

        if target.kind == "yarn":
            interest = 0.5 + p.curiosity * 0.3
            if target.state in MOVING_YARN_STATES:
                interest *= 1.5
            interest += p.energy * 0.2
            interest *= 1 - p.independence * 0.3
            return _clamp01(interest)

        if target.kind == "laser":
            # Even independent cats love lasers
            interest = 0.8 + p.curiosity * 0.2
            interest += p.energy * 0.3
            interest *= 1 - p.independence * 0.1
            return _clamp01(interest)

        if target.kind == "food:basic":
            interest = 0.5 + (1 - p.energy) * 0.3
            interest *= 1 - p.independence * 0.3
        elif target.kind == "food:fancy":
            interest = 0.7 + p.curiosity * 0.2
            interest *= 1 + p.curiosity * 0.3
        else:
            interest = 0.3
            if current_behavior in (BehaviorType.PLAYING, BehaviorType.EXPLORING):
                interest += 0.3  # thirsty after activity
            interest += (1 - motivation.rest) * 0.2
            interest *= 1 - p.independence * 0.2

        if current_behavior is BehaviorType.CONSUMING:
            return 0.0
        if current_behavior is BehaviorType.RESTING:
            interest *= 0.5 if target.kind == "food:fancy" else 0.2
        elif current_behavior is BehaviorType.PLAYING:
            interest *= 0.6
        elif current_behavior is BehaviorType.APPROACHING:
            interest *= 0.3

        interest += motivation.rest * 0.2

        distance = position.distance_to(target.position)
        distance_factor = max(0.0, 1 - distance / INTEREST_DISTANCE_FALLOFF_PX)
        interest *= 0.7 + distance_factor * 0.3

        return _clamp01(interest)
