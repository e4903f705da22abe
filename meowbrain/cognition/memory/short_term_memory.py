"""
Meowbrain - Short-Term Memory
Bounded recent history used to discourage repetition and react to
boundary collisions.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from ...constants import (
    BOUNDARY_HIT_DECAY,
    MAX_BOUNDARY_HITS,
    MAX_PREVIOUS_BEHAVIORS,
    MAX_VISITED_POSITIONS,
)
from ..behavior.behavior import BehaviorType
from ..behavior.context import Position


@dataclass(frozen=True)
class Memory:
    """
    A cat's short-term memory.

    Attributes:
        visited_positions: Most recent positions, oldest first (at most 10)
        previous_behaviors: Most recent behaviors, oldest first (at most 5)
        boundary_hits: Decaying collision counter in [0, 5]
        last_interaction_time: Timestamp of the last update or interaction
    """

    visited_positions: tuple[Position, ...] = field(default_factory=tuple)
    previous_behaviors: tuple[BehaviorType, ...] = field(default_factory=tuple)
    boundary_hits: float = 0.0
    last_interaction_time: float = 0.0

    @classmethod
    def initial(cls, position: Position, now: float) -> Memory:
        """Memory of a freshly created cat standing at position."""
        return cls(visited_positions=(position,), last_interaction_time=now)

    def recent_behaviors(self, count: int) -> tuple[BehaviorType, ...]:
        """The last count behaviors, oldest first."""
        if count <= 0:
            return ()
        return self.previous_behaviors[-count:]

    def get_state(self) -> dict[str, Any]:
        """Get serializable state."""
        return {
            "visited_positions": [p.get_state() for p in self.visited_positions],
            "previous_behaviors": [b.value for b in self.previous_behaviors],
            "boundary_hits": self.boundary_hits,
            "last_interaction_time": self.last_interaction_time,
        }

    @classmethod
    def from_state(cls, state: dict[str, Any]) -> Memory:
        """Create a Memory from saved state, enforcing the size bounds."""
        positions = [Position.from_state(p) for p in state.get("visited_positions", [])]
        behaviors = [BehaviorType.parse(b) for b in state.get("previous_behaviors", [])]
        hits = float(state.get("boundary_hits", 0.0))
        return cls(
            visited_positions=tuple(positions[-MAX_VISITED_POSITIONS:]),
            previous_behaviors=tuple(behaviors[-MAX_PREVIOUS_BEHAVIORS:]),
            boundary_hits=max(0.0, min(MAX_BOUNDARY_HITS, hits)),
            last_interaction_time=float(state.get("last_interaction_time", 0.0)),
        )

    def summary(self) -> dict[str, Any]:
        """Get a summary for logging/debugging."""
        return {
            "positions": len(self.visited_positions),
            "recent_behaviors": [b.value for b in self.previous_behaviors],
            "boundary_hits": self.boundary_hits,
            "last_interaction_time": self.last_interaction_time,
        }


def advance_memory(
    memory: Memory,
    new_position: Position,
    new_behavior: BehaviorType,
    boundary_hit: bool,
    now: float,
) -> Memory:
    """
    Fold one decision cycle into memory.

    Appends the position and behavior (evicting the oldest past the bounds),
    bumps or decays the boundary counter, and stamps the update time.

    Args:
        memory: Memory before this cycle
        new_position: Where the cat is now
        new_behavior: Behavior the cat is now engaged in
        boundary_hit: Whether the cat hit a boundary since the last cycle
        now: Host clock timestamp

    Returns:
        New Memory
    """
    if boundary_hit:
        hits = min(MAX_BOUNDARY_HITS, memory.boundary_hits + 1)
    else:
        hits = max(0.0, memory.boundary_hits - BOUNDARY_HIT_DECAY)

    return Memory(
        visited_positions=(*memory.visited_positions, new_position)[-MAX_VISITED_POSITIONS:],
        previous_behaviors=(*memory.previous_behaviors, new_behavior)[-MAX_PREVIOUS_BEHAVIORS:],
        boundary_hits=hits,
        last_interaction_time=now,
    )


def record_interaction(memory: Memory, now: float) -> Memory:
    """Stamp an interaction without otherwise changing memory."""
    return replace(memory, last_interaction_time=now)
