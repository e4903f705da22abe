"""
Meowbrain - Personality Traits
Static trait vector that shapes a cat's baseline behavior tendencies.
"""

from __future__ import annotations

import random
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from typing import Any, Union

from ...constants import TRAIT_MAX, TRAIT_MIN


TRAIT_NAMES: tuple[str, ...] = (
    "energy",
    "curiosity",
    "playfulness",
    "independence",
    "sociability",
)

# Personality presets
PRESETS: dict[str, dict[str, float]] = {
    "lazy": {
        "energy": 0.2,
        "curiosity": 0.3,
        "playfulness": 0.2,
        "independence": 0.7,
        "sociability": 0.4,
    },
    "playful": {
        "energy": 0.85,
        "curiosity": 0.7,
        "playfulness": 0.95,
        "independence": 0.4,
        "sociability": 0.8,
    },
    "curious": {
        "energy": 0.7,
        "curiosity": 0.95,
        "playfulness": 0.6,
        "independence": 0.5,
        "sociability": 0.6,
    },
    "aloof": {
        "energy": 0.5,
        "curiosity": 0.4,
        "playfulness": 0.3,
        "independence": 0.95,
        "sociability": 0.2,
    },
    "energetic": {
        "energy": 0.95,
        "curiosity": 0.6,
        "playfulness": 0.8,
        "independence": 0.5,
        "sociability": 0.7,
    },
    "balanced": {
        "energy": 0.5,
        "curiosity": 0.5,
        "playfulness": 0.5,
        "independence": 0.5,
        "sociability": 0.5,
    },
}


@dataclass(frozen=True)
class Personality:
    """
    Personality traits that shape a cat's behavior preferences.

    Each trait ranges from 0.0 to 1.0:
    - energy: Overall activity level (high = restless, low = sleepy)
    - curiosity: Drive to explore and observe
    - playfulness: How much the cat enjoys play
    - independence: Preference for doing its own thing
    - sociability: Interest in others

    Profiles are immutable. Reassigning a personality replaces the whole
    profile; out-of-range values are rejected rather than clamped.
    """

    energy: float = 0.5
    curiosity: float = 0.5
    playfulness: float = 0.5
    independence: float = 0.5
    sociability: float = 0.5

    def __post_init__(self) -> None:
        """Reject traits outside [0, 1]."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Invalid personality: {f.name} must be a number")
            if not TRAIT_MIN <= value <= TRAIT_MAX:
                raise ValueError(
                    f"Invalid personality: {f.name}={value} "
                    f"(all traits must be between {TRAIT_MIN} and {TRAIT_MAX})"
                )

    def get_trait(self, name: str) -> float:
        """Get a trait value by name."""
        if name not in TRAIT_NAMES:
            raise ValueError(f"Unknown trait: {name}")
        return getattr(self, name)

    def merged(self, traits: Mapping[str, float]) -> Personality:
        """Return a new profile with some traits replaced."""
        unknown = set(traits) - set(TRAIT_NAMES)
        if unknown:
            raise ValueError(f"Unknown traits: {sorted(unknown)}")
        return Personality(**{**self.get_state(), **traits})

    @classmethod
    def random(cls, rng: random.Random | None = None) -> Personality:
        """Generate a random personality."""
        rng = rng or random.Random()
        return cls(**{name: rng.uniform(TRAIT_MIN, TRAIT_MAX) for name in TRAIT_NAMES})

    @classmethod
    def from_preset(cls, preset_name: str) -> Personality:
        """Create a personality from a preset name."""
        if preset_name not in PRESETS:
            raise ValueError(f"Unknown preset: {preset_name}. Available: {list(PRESETS.keys())}")
        return cls(**PRESETS[preset_name])

    @classmethod
    def available_presets(cls) -> list[str]:
        """Get list of available preset names."""
        return list(PRESETS.keys())

    def get_state(self) -> dict[str, float]:
        """Get serializable state for persistence."""
        return asdict(self)

    @classmethod
    def from_state(cls, state: Mapping[str, Any]) -> Personality:
        """
        Create a Personality from a trait mapping.

        Every trait must be present; partial mappings should go through
        merged() on an existing profile instead.
        """
        missing = [name for name in TRAIT_NAMES if name not in state]
        if missing:
            raise ValueError(f"Invalid personality: missing traits {missing}")
        return cls(**{name: state[name] for name in TRAIT_NAMES})

    def describe(self) -> str:
        """Get a human-readable description of this personality."""
        descriptions = []

        if self.energy > 0.75:
            descriptions.append("high-energy")
        elif self.energy < 0.25:
            descriptions.append("sleepy")

        if self.curiosity > 0.75:
            descriptions.append("extremely curious")

        if self.playfulness > 0.75:
            descriptions.append("very playful")
        elif self.playfulness < 0.25:
            descriptions.append("serious")

        if self.independence > 0.75:
            descriptions.append("independent")

        if self.sociability > 0.75:
            descriptions.append("highly social")
        elif self.sociability < 0.25:
            descriptions.append("aloof")

        if not descriptions:
            return "balanced personality"

        return ", ".join(descriptions)

    def __str__(self) -> str:
        return f"Personality({self.describe()})"


PersonalityInput = Union[str, Personality, Mapping[str, float]]


def resolve_personality(value: PersonalityInput) -> Personality:
    """
    Turn a preset name, profile or raw trait mapping into a Personality.

    Raises:
        ValueError: Unknown preset, missing trait or trait outside [0, 1]
    """
    if isinstance(value, Personality):
        return value
    if isinstance(value, str):
        return Personality.from_preset(value)
    return Personality.from_state(value)
