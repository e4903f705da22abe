"""
Meowbrain - Behavior System
Behavior types, weighting, selection and transition rules.
"""

from .behavior import (
    ALL_BEHAVIORS,
    BEHAVIOR_DURATION_RANGES,
    NEED_DRIVEN_BEHAVIORS,
    SAMPLED_BEHAVIORS,
    BehaviorType,
    behavior_duration,
)
from .context import Attractor, Boundaries, Environment, Obstacle, Position
from .evaluator import (
    BehaviorWeights,
    RandomSource,
    compute_weights,
    describe_weights,
    select_behavior,
)
from .interest import TARGET_KINDS, InteractionTarget, InterestEvaluator
from .transitions import VALID_TRANSITIONS, allowed_targets, is_valid_transition

__all__ = [
    # Behavior types
    "BehaviorType",
    "ALL_BEHAVIORS",
    "SAMPLED_BEHAVIORS",
    "NEED_DRIVEN_BEHAVIORS",
    "BEHAVIOR_DURATION_RANGES",
    "behavior_duration",
    # World context
    "Position",
    "Boundaries",
    "Obstacle",
    "Attractor",
    "Environment",
    # Weighting and selection
    "BehaviorWeights",
    "RandomSource",
    "compute_weights",
    "select_behavior",
    "describe_weights",
    # Transitions
    "VALID_TRANSITIONS",
    "is_valid_transition",
    "allowed_targets",
    # Interactions
    "InteractionTarget",
    "InterestEvaluator",
    "TARGET_KINDS",
]
