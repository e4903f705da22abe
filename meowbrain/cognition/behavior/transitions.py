"""
Meowbrain - Behavior Transitions
Finite-state machine deciding which behavior changes are legal.
"""

from __future__ import annotations

from .behavior import ALL_BEHAVIORS, NEED_DRIVEN_BEHAVIORS, BehaviorType

B = BehaviorType

VALID_TRANSITIONS: dict[BehaviorType, frozenset[BehaviorType]] = {
    B.WANDERING: frozenset({B.EXPLORING, B.PLAYING, B.OBSERVING, B.RESTING, B.APPROACHING}),
    B.RESTING: frozenset({B.WANDERING, B.EXPLORING, B.OBSERVING, B.APPROACHING}),
    B.PLAYING: frozenset({B.WANDERING, B.RESTING, B.APPROACHING}),
    B.OBSERVING: frozenset({B.WANDERING, B.EXPLORING, B.RESTING, B.APPROACHING}),
    B.EXPLORING: frozenset({B.WANDERING, B.OBSERVING, B.RESTING, B.APPROACHING}),
    B.APPROACHING: frozenset({B.CONSUMING, B.OBSERVING, B.RESTING}),
    B.CONSUMING: frozenset({B.RESTING}),
}


def is_valid_transition(from_behavior: BehaviorType, to_behavior: BehaviorType) -> bool:
    """
    Check whether a cat may switch from one behavior to another.

    Rules, in order:
    1. From consuming, only resting is allowed (a cat winds down after eating).
    2. Anything may switch to resting.
    3. Anything may be interrupted by approaching or consuming.
    4. Otherwise the per-behavior allow-list decides.

    Same-state changes are not meaningful here; callers should treat them as
    "keep current behavior" before asking.

    Returns:
        True if the change may be committed
    """
    if from_behavior is B.CONSUMING:
        return to_behavior is B.RESTING

    if to_behavior is B.RESTING:
        return True

    if to_behavior in NEED_DRIVEN_BEHAVIORS:
        return True

    return to_behavior in VALID_TRANSITIONS.get(from_behavior, frozenset())


def allowed_targets(from_behavior: BehaviorType) -> list[BehaviorType]:
    """Every behavior reachable from from_behavior, in declaration order."""
    return [
        to_behavior
        for to_behavior in ALL_BEHAVIORS
        if to_behavior is not from_behavior and is_valid_transition(from_behavior, to_behavior)
    ]
