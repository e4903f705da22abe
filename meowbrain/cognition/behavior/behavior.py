"""
Meowbrain - Behavior Types
The closed set of behaviors a cat can be engaged in.
"""

from enum import Enum


class BehaviorType(str, Enum):
    """
    Activities a cat can perform.

    Declaration order is significant: weight maps, the selector and the
    transition table all iterate behaviors in this order.
    """

    WANDERING = "wandering"
    RESTING = "resting"
    PLAYING = "playing"
    OBSERVING = "observing"
    EXPLORING = "exploring"
    APPROACHING = "approaching"
    CONSUMING = "consuming"

    @classmethod
    def parse(cls, value: "BehaviorType | str") -> "BehaviorType":
        """Convert a behavior name to a BehaviorType (ValueError if unknown)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Unknown behavior: {value}. Available: {[b.value for b in cls]}"
            ) from None

    @property
    def is_need_driven(self) -> bool:
        """Whether this behavior is only entered through a need response."""
        return self in NEED_DRIVEN_BEHAVIORS

    def __str__(self) -> str:
        return self.value


ALL_BEHAVIORS: tuple[BehaviorType, ...] = tuple(BehaviorType)

# Entered only through explicit host calls, never by weighted sampling
NEED_DRIVEN_BEHAVIORS: frozenset[BehaviorType] = frozenset(
    {BehaviorType.APPROACHING, BehaviorType.CONSUMING}
)

SAMPLED_BEHAVIORS: tuple[BehaviorType, ...] = tuple(
    b for b in ALL_BEHAVIORS if b not in NEED_DRIVEN_BEHAVIORS
)

# Seconds a behavior typically lasts before the next decision
BEHAVIOR_DURATION_RANGES: dict[BehaviorType, tuple[float, float]] = {
    BehaviorType.WANDERING: (3.0, 8.0),
    BehaviorType.RESTING: (4.0, 10.0),
    BehaviorType.PLAYING: (2.0, 6.0),
    BehaviorType.OBSERVING: (3.0, 7.0),
    BehaviorType.EXPLORING: (5.0, 12.0),
    BehaviorType.APPROACHING: (2.0, 4.0),
    BehaviorType.CONSUMING: (3.0, 6.0),
}


def behavior_duration(behavior: BehaviorType, energy: float, draw: float) -> float:
    """
    How long a behavior should run, in seconds.

    Low-energy cats rest longer and high-energy cats play longer.

    Args:
        behavior: Behavior being executed
        energy: Personality energy trait (0-1)
        draw: Uniform value in [0, 1) picking a point in the range

    Returns:
        Duration in seconds
    """
    low, high = BEHAVIOR_DURATION_RANGES[behavior]
    duration = low + draw * (high - low)
    if behavior is BehaviorType.RESTING:
        duration *= 1.5 - energy
    elif behavior is BehaviorType.PLAYING:
        duration *= 0.5 + energy
    return duration
