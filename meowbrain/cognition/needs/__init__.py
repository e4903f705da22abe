"""
Meowbrain - Needs Module
Personality traits and the drives that push a cat toward behaviors.
"""

from .personality import (
    PRESETS,
    TRAIT_NAMES,
    Personality,
    PersonalityInput,
    resolve_personality,
)
from .motivation import (
    BEHAVIOR_EFFECTS,
    DRIVE_NAMES,
    DecayRates,
    Motivation,
    advance_motivation,
)

__all__ = [
    "Personality",
    "PersonalityInput",
    "PRESETS",
    "TRAIT_NAMES",
    "resolve_personality",
    "Motivation",
    "DecayRates",
    "DRIVE_NAMES",
    "BEHAVIOR_EFFECTS",
    "advance_motivation",
]
