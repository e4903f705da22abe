"""
Meowbrain - Configuration
Brain configuration with environment variable support.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .cognition.needs import PRESETS, DecayRates, Motivation
from .constants import (
    DECISION_INTERVAL_MAX_S,
    DECISION_INTERVAL_MIN_S,
    DEFAULT_EXPLORATION_DECAY,
    DEFAULT_PERSONALITY_PRESET,
    DEFAULT_REST_DECAY,
    DEFAULT_STIMULATION_DECAY,
    INTEREST_THRESHOLD,
)


@dataclass
class BrainConfig:
    """Configuration for a cat brain with sensible defaults."""

    # Personality preset used when none is given explicitly
    personality_preset: str = DEFAULT_PERSONALITY_PRESET

    # Seconds between decision cycles, drawn uniformly from [min, max]
    decision_interval_min: float = DECISION_INTERVAL_MIN_S
    decision_interval_max: float = DECISION_INTERVAL_MAX_S

    # Drive growth per second
    decay_rates: DecayRates = field(default_factory=DecayRates)

    # Starting drive levels
    initial_motivation: Motivation = field(default_factory=Motivation)

    # Interest above this triggers a need response
    interest_threshold: float = INTEREST_THRESHOLD

    @classmethod
    def from_env(cls) -> BrainConfig:
        """
        Load configuration from environment variables.

        Environment variables:
            MEOWBRAIN_PERSONALITY: Personality preset name
            MEOWBRAIN_DECISION_MIN: Minimum seconds between decisions
            MEOWBRAIN_DECISION_MAX: Maximum seconds between decisions
            MEOWBRAIN_DECAY_REST: Rest drive growth per second
            MEOWBRAIN_DECAY_STIMULATION: Stimulation drive growth per second
            MEOWBRAIN_DECAY_EXPLORATION: Exploration drive growth per second
            MEOWBRAIN_INTEREST_THRESHOLD: Interest needed to respond to a need
        """
        return cls(
            personality_preset=os.getenv("MEOWBRAIN_PERSONALITY", DEFAULT_PERSONALITY_PRESET),
            decision_interval_min=float(
                os.getenv("MEOWBRAIN_DECISION_MIN", str(DECISION_INTERVAL_MIN_S))
            ),
            decision_interval_max=float(
                os.getenv("MEOWBRAIN_DECISION_MAX", str(DECISION_INTERVAL_MAX_S))
            ),
            decay_rates=DecayRates(
                rest=float(os.getenv("MEOWBRAIN_DECAY_REST", str(DEFAULT_REST_DECAY))),
                stimulation=float(
                    os.getenv("MEOWBRAIN_DECAY_STIMULATION", str(DEFAULT_STIMULATION_DECAY))
                ),
                exploration=float(
                    os.getenv("MEOWBRAIN_DECAY_EXPLORATION", str(DEFAULT_EXPLORATION_DECAY))
                ),
            ),
            interest_threshold=float(
                os.getenv("MEOWBRAIN_INTEREST_THRESHOLD", str(INTEREST_THRESHOLD))
            ),
        )

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if self.personality_preset not in PRESETS:
            errors.append(
                f"personality_preset must be one of {list(PRESETS.keys())}, "
                f"got {self.personality_preset!r}"
            )
        if self.decision_interval_min <= 0:
            errors.append("decision_interval_min must be positive")
        if self.decision_interval_max < self.decision_interval_min:
            errors.append("decision_interval_max must be >= decision_interval_min")
        for name, rate in self.decay_rates.get_state().items():
            if rate < 0:
                errors.append(f"decay rate for {name} must be non-negative")
        if not 0.0 <= self.interest_threshold <= 1.0:
            errors.append("interest_threshold must be between 0 and 1")

        return errors

    def summary(self) -> dict[str, object]:
        """Get a summary for logging/debugging."""
        return {
            "personality_preset": self.personality_preset,
            "decision_interval": [self.decision_interval_min, self.decision_interval_max],
            "decay_rates": self.decay_rates.get_state(),
            "initial_motivation": self.initial_motivation.get_state(),
            "interest_threshold": self.interest_threshold,
        }
