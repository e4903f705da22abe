"""
Meowbrain - Environment Context
Read-only snapshot of the world a cat lives in, supplied by the host.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Literal


@dataclass(frozen=True)
class Position:
    """A point on screen, in pixels."""

    x: float = 0.0
    y: float = 0.0

    def distance_to(self, other: Position) -> float:
        """Euclidean distance to another position."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def get_state(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_state(cls, state: dict[str, Any]) -> Position:
        return cls(x=float(state.get("x", 0.0)), y=float(state.get("y", 0.0)))


@dataclass(frozen=True)
class Boundaries:
    """
    Movement limits. Any edge left as None is open.
    """

    min_x: float | None = None
    max_x: float | None = None
    min_y: float | None = None
    max_y: float | None = None

    def contains(self, position: Position) -> bool:
        """Check whether a position lies inside every closed edge."""
        if self.min_x is not None and position.x < self.min_x:
            return False
        if self.max_x is not None and position.x > self.max_x:
            return False
        if self.min_y is not None and position.y < self.min_y:
            return False
        if self.max_y is not None and position.y > self.max_y:
            return False
        return True

    def clamp(self, position: Position) -> Position:
        """Nearest position inside the boundaries."""
        x, y = position.x, position.y
        if self.min_x is not None:
            x = max(x, self.min_x)
        if self.max_x is not None:
            x = min(x, self.max_x)
        if self.min_y is not None:
            y = max(y, self.min_y)
        if self.max_y is not None:
            y = min(y, self.max_y)
        return Position(x, y)

    def get_state(self) -> dict[str, float | None]:
        return {
            "min_x": self.min_x,
            "max_x": self.max_x,
            "min_y": self.min_y,
            "max_y": self.max_y,
        }

    @classmethod
    def from_state(cls, state: dict[str, Any]) -> Boundaries:
        return cls(
            min_x=state.get("min_x"),
            max_x=state.get("max_x"),
            min_y=state.get("min_y"),
            max_y=state.get("max_y"),
        )


@dataclass(frozen=True)
class Obstacle:
    """A circular region the cat should steer around."""

    position: Position
    radius: float


@dataclass(frozen=True)
class Attractor:
    """Something that draws the cat's attention."""

    position: Position
    strength: float = 1.0
    kind: Literal["point", "area"] = "point"


@dataclass(frozen=True)
class Environment:
    """
    Environmental context for decision-making.

    Absent or empty fields have no effect on behavior weights.
    other_agents is carried for the host and never interpreted here.

    Attributes:
        boundaries: Movement limits, None if unbounded
        obstacles: Obstacles in the world
        attractors: Points or areas of interest
        other_agents: Opaque references to other cats
    """

    boundaries: Boundaries | None = None
    obstacles: tuple[Obstacle, ...] = field(default_factory=tuple)
    attractors: tuple[Attractor, ...] = field(default_factory=tuple)
    other_agents: tuple[Any, ...] = field(default_factory=tuple)

    @property
    def has_attractors(self) -> bool:
        return len(self.attractors) > 0

    @property
    def has_obstacles(self) -> bool:
        return len(self.obstacles) > 0

    def get_state(self) -> dict[str, Any]:
        """Get serializable state (other_agents are not serialized)."""
        return {
            "boundaries": self.boundaries.get_state() if self.boundaries else None,
            "obstacles": [
                {"position": o.position.get_state(), "radius": o.radius}
                for o in self.obstacles
            ],
            "attractors": [
                {
                    "position": a.position.get_state(),
                    "strength": a.strength,
                    "kind": a.kind,
                }
                for a in self.attractors
            ],
        }

    @classmethod
    def from_state(cls, state: dict[str, Any]) -> Environment:
        """Create an Environment from saved state."""
        boundaries = state.get("boundaries")
        for a in state.get("attractors", []):
            if a.get("kind", "point") not in ("point", "area"):
                raise ValueError(f"Unknown attractor kind: {a.get('kind')}")
        return cls(
            boundaries=Boundaries.from_state(boundaries) if boundaries else None,
            obstacles=tuple(
                Obstacle(
                    position=Position.from_state(o.get("position", {})),
                    radius=float(o.get("radius", 0.0)),
                )
                for o in state.get("obstacles", [])
            ),
            attractors=tuple(
                Attractor(
                    position=Position.from_state(a.get("position", {})),
                    strength=float(a.get("strength", 1.0)),
                    kind=a.get("kind", "point"),
                )
                for a in state.get("attractors", [])
            ),
        )

    def summary(self) -> dict[str, Any]:
        """Get a summary for logging/debugging."""
        return {
            "bounded": self.boundaries is not None,
            "obstacles": len(self.obstacles),
            "attractors": len(self.attractors),
            "other_agents": len(self.other_agents),
        }
