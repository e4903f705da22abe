"""
Meowbrain - Brain
Runs decision cycles for one cat and commits legal behavior changes.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .cognition.behavior import (
    BehaviorType,
    BehaviorWeights,
    Environment,
    InteractionTarget,
    InterestEvaluator,
    Position,
    RandomSource,
    behavior_duration,
    compute_weights,
    describe_weights,
    is_valid_transition,
    select_behavior,
)
from .cognition.memory import Memory, advance_memory, record_interaction
from .cognition.needs import (
    DecayRates,
    Motivation,
    Personality,
    PersonalityInput,
    advance_motivation,
    resolve_personality,
)
from .config import BrainConfig

logger = logging.getLogger(__name__)

Executor = Callable[[BehaviorType, dict[str, Any]], Awaitable[None]]
EventHandler = Callable[[dict[str, Any]], None]


class BrainEvent(str, Enum):
    """Events a brain emits for observers."""

    BEHAVIOR_CHANGE = "behaviorChange"
    DECISION_MADE = "decisionMade"
    REACTION_TRIGGERED = "reactionTriggered"


@dataclass(frozen=True)
class Decision:
    """
    Outcome of one decision cycle.

    Attributes:
        candidate: Behavior drawn by the weighted sampler
        previous: Behavior before the cycle
        current: Behavior after the cycle
        weights: Weights the candidate was drawn from
        motivation: Drives used for the weights
        timestamp: Host clock time of the cycle
    """

    candidate: BehaviorType
    previous: BehaviorType
    current: BehaviorType
    weights: BehaviorWeights
    motivation: Motivation
    timestamp: float

    @property
    def changed(self) -> bool:
        return self.current is not self.previous

    @property
    def rejected(self) -> bool:
        """Whether the candidate was an illegal transition and was dropped."""
        return self.candidate is not self.previous and self.candidate is not self.current


class Brain:
    """
    Autonomous decision host for a single cat.

    Each cycle:
    - Grows and relieves drives for the time spent in the current behavior
    - Weights behaviors from personality, drives, memory and environment
    - Samples a candidate and commits it only if the transition is legal
    - Folds position, behavior and boundary collisions into memory

    Need responses (approaching, consuming) bypass sampling but still go
    through the transition rules. The movement layer reports positions and
    collisions and may supply an async executor that performs each
    committed behavior.

    Usage:
        brain = Brain("cat-1", personality="curious")
        brain.on(BrainEvent.BEHAVIOR_CHANGE, handler)
        await brain.start()
        ...
        await brain.stop()
    """

    def __init__(
        self,
        cat_id: str,
        config: BrainConfig | None = None,
        *,
        personality: PersonalityInput | None = None,
        environment: Environment | None = None,
        position: Position | None = None,
        rng: RandomSource | None = None,
        clock: Callable[[], float] = time.time,
        executor: Executor | None = None,
    ) -> None:
        """
        Initialize the brain.

        Args:
            cat_id: Identifier of the cat this brain drives
            config: Brain configuration (defaults if None)
            personality: Preset name, profile or trait mapping.
                        If None, uses the configured preset.
            environment: Initial world snapshot
            position: Starting position
            rng: Random source for sampling and decision timing
            clock: Returns the current time in seconds
            executor: Async callback that performs a behavior

        Raises:
            ValueError: If the configuration or personality is invalid
        """
        self._config = config or BrainConfig()
        issues = self._config.validate()
        if issues:
            raise ValueError(f"Invalid brain config: {issues}")

        self.cat_id = cat_id
        self.id = f"brain-{cat_id}"

        self._rng: RandomSource = rng or random.Random()
        self._clock = clock
        self._executor = executor

        self._personality = resolve_personality(
            personality if personality is not None else self._config.personality_preset
        )
        self._environment = environment or Environment()
        self._decay_rates = self._config.decay_rates

        now = self._clock()
        self._position = position or Position()
        self._current_behavior = BehaviorType.WANDERING
        self._motivation = self._config.initial_motivation
        self._memory = Memory.initial(self._position, now)
        self._interest = InterestEvaluator(self._personality)
        self._target: InteractionTarget | None = None

        self._last_update_time = now
        self._last_decision_time = now
        self._pending_boundary_hits = 0
        self._last_decision: Decision | None = None

        self._handlers: dict[BrainEvent, list[EventHandler]] = {event: [] for event in BrainEvent}

        self._running = False
        self._destroyed = False
        self._task: asyncio.Task[None] | None = None

    # Read-only views

    @property
    def personality(self) -> Personality:
        return self._personality

    @property
    def motivation(self) -> Motivation:
        return self._motivation

    @property
    def memory(self) -> Memory:
        return self._memory

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def position(self) -> Position:
        return self._position

    @property
    def current_behavior(self) -> BehaviorType:
        return self._current_behavior

    @property
    def target(self) -> InteractionTarget | None:
        """Need or toy currently being approached or consumed."""
        return self._target

    @property
    def last_decision(self) -> Decision | None:
        return self._last_decision

    @property
    def is_running(self) -> bool:
        return self._running and not self._destroyed

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    # Lifecycle

    async def start(self) -> None:
        """
        Start the decision loop.

        Raises:
            RuntimeError: If the brain has been destroyed
        """
        if self._destroyed:
            raise RuntimeError("Cannot start destroyed brain")
        if self._running:
            return

        self._running = True
        self._last_update_time = self._clock()
        self._task = asyncio.create_task(self._decision_loop(), name=f"{self.id}-decisions")
        logger.info(f"{self.id} started ({self._personality.describe()})")

    async def stop(self) -> None:
        """Stop the decision loop. Safe to call repeatedly."""
        if not self._running:
            return

        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        logger.info(f"{self.id} stopped")

    async def destroy(self) -> None:
        """Stop permanently and drop all event handlers."""
        if self._destroyed:
            return

        await self.stop()
        self._destroyed = True
        for handlers in self._handlers.values():
            handlers.clear()
        logger.info(f"{self.id} destroyed")

    async def _decision_loop(self) -> None:
        """Decide, execute, then wait a random interval, until stopped."""
        logger.debug(
            f"{self.id} decision loop started "
            f"({self._config.decision_interval_min}-{self._config.decision_interval_max}s)"
        )

        while self._running:
            await asyncio.sleep(self._next_interval())
            if not self._running:
                break

            try:
                self.decide()
                if self._executor is not None:
                    await self._executor(self._current_behavior, self._execution_context())
            except Exception as e:
                logger.error(f"Error in decision cycle for {self.id}: {e}")

    def _next_interval(self) -> float:
        low = self._config.decision_interval_min
        high = self._config.decision_interval_max
        return low + self._rng.random() * (high - low)

    def _execution_context(self) -> dict[str, Any]:
        context: dict[str, Any] = {
            "visited_positions": list(self._memory.visited_positions),
            "duration": behavior_duration(
                self._current_behavior, self._personality.energy, self._rng.random()
            ),
        }
        if self._target is not None and self._current_behavior in (
            BehaviorType.APPROACHING,
            BehaviorType.CONSUMING,
        ):
            context["target"] = self._target.position
        return context

    # Decision cycle

    def decide(self) -> Decision:
        """
        Run one decision cycle.

        An illegal candidate is dropped and the current behavior kept.

        Returns:
            The Decision made this cycle
        """
        now = self._settle_motivation()

        weights = compute_weights(
            self._personality, self._motivation, self._memory, self._environment
        )
        candidate = select_behavior(weights, self._rng)
        previous = self._current_behavior

        if candidate is not previous:
            if is_valid_transition(previous, candidate):
                self._set_behavior(candidate)
            else:
                logger.debug(f"{self.id} rejected transition {previous} -> {candidate}")

        self._memory = advance_memory(
            self._memory,
            self._position,
            self._current_behavior,
            self._pending_boundary_hits > 0,
            now,
        )
        self._pending_boundary_hits = 0
        self._last_decision_time = now

        decision = Decision(
            candidate=candidate,
            previous=previous,
            current=self._current_behavior,
            weights=weights,
            motivation=self._motivation,
            timestamp=now,
        )
        self._last_decision = decision

        self._emit(
            BrainEvent.DECISION_MADE,
            {
                "chosen": candidate.value,
                "behavior": self._current_behavior.value,
                "weights": weights.summary(),
                "motivation": self._motivation.get_state(),
            },
        )
        if decision.changed:
            self._emit_behavior_change(previous, "decision")

        return decision

    def _settle_motivation(self) -> float:
        """Charge the time since the last update to the current behavior."""
        now = self._clock()
        self._motivation = advance_motivation(
            self._motivation,
            self._current_behavior,
            now - self._last_update_time,
            self._decay_rates,
        )
        self._last_update_time = now
        return now

    def current_weights(self) -> BehaviorWeights:
        """Weights for the current state, without advancing anything."""
        return compute_weights(
            self._personality, self._motivation, self._memory, self._environment
        )

    # Need-driven interrupts

    def evaluate_interest(self, target: InteractionTarget) -> float:
        """Interest in a target given the cat's current state (0-1)."""
        return self._interest.evaluate(
            target, self._current_behavior, self._motivation, self._position
        )

    def respond_to_need(self, target: InteractionTarget) -> bool:
        """
        Consider interrupting the current behavior to approach a target.

        Returns:
            True if the cat is now approaching the target
        """
        interest = self.evaluate_interest(target)
        if interest <= self._config.interest_threshold:
            logger.debug(f"{self.id} ignored {target.kind} (interest {interest:.2f})")
            return False

        if not self._commit(BehaviorType.APPROACHING, "need"):
            return False

        self._target = target
        self._memory = record_interaction(self._memory, self._clock())
        logger.info(f"{self.id} approaching {target.kind} (interest {interest:.2f})")
        return True

    def consume(self) -> bool:
        """
        Start consuming, typically after reaching an approached target.

        Returns:
            True if the cat is now consuming
        """
        if not self._commit(BehaviorType.CONSUMING, "need"):
            return False
        self._memory = record_interaction(self._memory, self._clock())
        return True

    def finish_consuming(self) -> bool:
        """
        End a meal. Resting is the only legal way out of consuming.

        Returns:
            True if the cat was consuming and is now resting
        """
        if self._current_behavior is not BehaviorType.CONSUMING:
            return False
        self._target = None
        return self._commit(BehaviorType.RESTING, "finished consuming")

    def _commit(self, behavior: BehaviorType, reason: str) -> bool:
        previous = self._current_behavior
        if behavior is previous:
            return False
        if not is_valid_transition(previous, behavior):
            logger.warning(f"{self.id} cannot switch {previous} -> {behavior} ({reason})")
            return False

        self._settle_motivation()
        self._set_behavior(behavior)
        self._emit_behavior_change(previous, reason)
        return True

    def _set_behavior(self, behavior: BehaviorType) -> None:
        if behavior not in (BehaviorType.APPROACHING, BehaviorType.CONSUMING):
            self._target = None
        self._current_behavior = behavior

    # Movement layer feedback

    def report_position(self, position: Position) -> None:
        """Update where the cat is; recorded into memory on the next cycle."""
        self._position = position

    def record_boundary_hit(self) -> None:
        """Note a boundary collision; folded into memory on the next cycle."""
        self._pending_boundary_hits += 1
        self._emit(
            BrainEvent.REACTION_TRIGGERED,
            {"type": "boundaryHit", "count": self._pending_boundary_hits},
        )

    # Configuration

    def set_personality(self, personality: PersonalityInput) -> None:
        """
        Replace the personality.

        A preset name or full profile replaces it outright; a partial trait
        mapping replaces only the given traits.

        Raises:
            ValueError: Unknown preset or invalid traits
        """
        if self._destroyed:
            return

        if isinstance(personality, Mapping):
            self._personality = self._personality.merged(personality)
        else:
            self._personality = resolve_personality(personality)

        self._interest.update_personality(self._personality)
        logger.info(f"{self.id} personality set to {self._personality.describe()}")

    def set_environment(self, environment: Environment) -> None:
        """Replace the world snapshot."""
        if self._destroyed:
            return
        self._environment = environment

    def set_decay_rates(self, decay_rates: DecayRates) -> None:
        self._decay_rates = decay_rates

    def adjust_motivation(self, name: str, delta: float) -> None:
        """
        Shift one drive by delta (clamped to [0, 1]).

        Raises:
            ValueError: If the drive name is invalid
        """
        self._motivation = self._motivation.adjusted(**{name: delta})
        logger.info(f"{self.id} adjusted motivation '{name}' by {delta}")

    # Events

    def on(self, event: BrainEvent | str, handler: EventHandler) -> None:
        """Register a handler for an event."""
        self._handlers[BrainEvent(event)].append(handler)

    def off(self, event: BrainEvent | str, handler: EventHandler) -> None:
        """Remove a previously registered handler."""
        handlers = self._handlers[BrainEvent(event)]
        if handler in handlers:
            handlers.remove(handler)

    def _emit(self, event: BrainEvent, data: dict[str, Any]) -> None:
        payload = {"brain_id": self.id, **data}
        for handler in list(self._handlers[event]):
            try:
                handler(payload)
            except Exception as e:
                logger.error(f"Error in {event.value} handler for {self.id}: {e}")

    def _emit_behavior_change(self, previous: BehaviorType, reason: str) -> None:
        logger.debug(f"{self.id} behavior {previous} -> {self._current_behavior} ({reason})")
        self._emit(
            BrainEvent.BEHAVIOR_CHANGE,
            {
                "old_behavior": previous.value,
                "new_behavior": self._current_behavior.value,
                "reason": reason,
                "motivation": self._motivation.get_state(),
            },
        )

    # Status

    def get_status(self) -> dict[str, Any]:
        """Get brain status for the dashboard."""
        return {
            "id": self.id,
            "cat_id": self.cat_id,
            "running": self.is_running,
            "destroyed": self._destroyed,
            "current_behavior": self._current_behavior.value,
            "target": self._target.get_state() if self._target else None,
            "position": self._position.get_state(),
            "personality": {
                **self._personality.get_state(),
                "description": self._personality.describe(),
            },
            "motivation": self._motivation.summary(),
            "memory": self._memory.summary(),
            "environment": self._environment.summary(),
            "last_decision_time": self._last_decision_time,
            "weights": describe_weights(self.current_weights()),
        }

    def __str__(self) -> str:
        return f"Brain({self.id}, {self._current_behavior}, running={self.is_running})"


class BrainBuilder:
    """
    Fluent configuration for a Brain.

    Usage:
        brain = (
            BrainBuilder("cat-1")
            .with_personality("lazy")
            .with_decision_interval(1.0, 3.0)
            .build()
        )
    """

    def __init__(self, cat_id: str) -> None:
        self._cat_id = cat_id
        self._config = BrainConfig()
        self._kwargs: dict[str, Any] = {}

    def with_personality(self, personality: PersonalityInput) -> BrainBuilder:
        self._kwargs["personality"] = personality
        return self

    def with_environment(self, environment: Environment) -> BrainBuilder:
        self._kwargs["environment"] = environment
        return self

    def with_position(self, position: Position) -> BrainBuilder:
        self._kwargs["position"] = position
        return self

    def with_decision_interval(self, minimum: float, maximum: float) -> BrainBuilder:
        """Set the range of seconds between decisions."""
        self._config.decision_interval_min = minimum
        self._config.decision_interval_max = maximum
        return self

    def with_motivation_decay(self, decay_rates: DecayRates) -> BrainBuilder:
        self._config.decay_rates = decay_rates
        return self

    def with_initial_motivation(self, motivation: Motivation) -> BrainBuilder:
        self._config.initial_motivation = motivation
        return self

    def with_rng(self, rng: RandomSource) -> BrainBuilder:
        self._kwargs["rng"] = rng
        return self

    def with_clock(self, clock: Callable[[], float]) -> BrainBuilder:
        self._kwargs["clock"] = clock
        return self

    def with_executor(self, executor: Executor) -> BrainBuilder:
        self._kwargs["executor"] = executor
        return self

    def build(self) -> Brain:
        """
        Build the Brain.

        Raises:
            ValueError: If the accumulated configuration is invalid
        """
        return Brain(self._cat_id, self._config, **self._kwargs)
