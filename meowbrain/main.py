"""
Meowbrain - Demo Host
Runs a small colony of simulated cats with the monitoring server attached.
"""

import asyncio
import logging
import os
import random
import signal
import sys
from pathlib import Path

from dotenv import load_dotenv
import uvicorn

# Load .env file from project root
load_dotenv(Path(__file__).parent.parent / ".env")

from .brain import Brain, BrainEvent
from .cognition.behavior import BehaviorType, Boundaries, Environment, Position
from .cognition.needs import PRESETS
from .config import BrainConfig
from .constants import DEFAULT_WORLD_HEIGHT, DEFAULT_WORLD_WIDTH
from .monitoring import MonitoringServer

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger("meowbrain.main")

DASHBOARD_HOST = os.getenv("MEOWBRAIN_DASHBOARD_HOST", "0.0.0.0")
DASHBOARD_PORT = int(os.getenv("MEOWBRAIN_DASHBOARD_PORT", "6082"))

# Pixels moved per committed behavior
STEP_DISTANCE: dict[BehaviorType, float] = {
    BehaviorType.WANDERING: 120.0,
    BehaviorType.EXPLORING: 200.0,
    BehaviorType.PLAYING: 60.0,
    BehaviorType.APPROACHING: 150.0,
}


class SimulatedCat:
    """
    Stand-in for the movement layer: nudges a point around the world and
    reports positions and boundary collisions back to its brain.
    """

    def __init__(self, boundaries: Boundaries, rng: random.Random) -> None:
        self._boundaries = boundaries
        self._rng = rng
        self.brain: Brain | None = None

    async def execute(self, behavior: BehaviorType, context: dict) -> None:
        """Move according to the committed behavior."""
        if self.brain is None:
            return

        current = self.brain.position
        step = STEP_DISTANCE.get(behavior, 0.0)
        target = context.get("target")

        if target is not None:
            dx, dy = target.x - current.x, target.y - current.y
            distance = max(1.0, current.distance_to(target))
            scale = min(1.0, step / distance)
            x, y = current.x + dx * scale, current.y + dy * scale
        else:
            x = current.x + self._rng.uniform(-step, step)
            y = current.y + self._rng.uniform(-step, step)

        wanted = Position(x, y)
        position = self._boundaries.clamp(wanted)
        if position != wanted:
            self.brain.record_boundary_hit()

        self.brain.report_position(position)

        if behavior is BehaviorType.APPROACHING and target is not None:
            if position.distance_to(target) < 1.0:
                self.brain.consume()
        elif behavior is BehaviorType.CONSUMING:
            self.brain.finish_consuming()


def create_colony(config: BrainConfig, rng: random.Random) -> list[Brain]:
    """One brain per personality preset, scattered across the world."""
    boundaries = Boundaries(0.0, DEFAULT_WORLD_WIDTH, 0.0, DEFAULT_WORLD_HEIGHT)
    environment = Environment(boundaries=boundaries)
    brains = []

    for preset in PRESETS:
        cat = SimulatedCat(boundaries, rng)
        brain = Brain(
            f"{preset}-cat",
            config,
            personality=preset,
            environment=environment,
            position=Position(
                rng.uniform(0.0, DEFAULT_WORLD_WIDTH),
                rng.uniform(0.0, DEFAULT_WORLD_HEIGHT),
            ),
            rng=rng,
            executor=cat.execute,
        )
        cat.brain = brain
        brains.append(brain)

    return brains


async def main() -> None:
    """Main entry point for the demo colony."""
    logger.info("Starting meowbrain demo colony...")

    config = BrainConfig.from_env()
    issues = config.validate()
    if issues:
        logger.warning(f"Config issues: {issues}; falling back to defaults")
        config = BrainConfig()

    rng = random.Random()
    brains = create_colony(config, rng)
    monitoring = MonitoringServer(brains)

    for brain in brains:
        brain.on(BrainEvent.BEHAVIOR_CHANGE, monitoring.schedule_behavior_change)

    loop = asyncio.get_running_loop()
    shutdown_event = asyncio.Event()

    def signal_handler() -> None:
        logger.info("Shutdown signal received")
        shutdown_event.set()

    if sys.platform == "win32":
        def windows_handler(signum: int, frame: object) -> None:
            loop.call_soon_threadsafe(shutdown_event.set)

        signal.signal(signal.SIGINT, windows_handler)
    else:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, signal_handler)

    server = uvicorn.Server(
        uvicorn.Config(
            monitoring.app,
            host=DASHBOARD_HOST,
            port=DASHBOARD_PORT,
            log_level="warning",
        )
    )

    dashboard_task: asyncio.Task[None] | None = None
    try:
        for brain in brains:
            await brain.start()

        dashboard_task = asyncio.create_task(server.serve(), name="dashboard_server")
        monitoring.run_broadcast_loop()

        logger.info(f"Dashboard available at http://{DASHBOARD_HOST}:{DASHBOARD_PORT}")
        await shutdown_event.wait()

    finally:
        logger.info("Shutting down...")

        await monitoring.stop_broadcast_loop()
        server.should_exit = True

        if dashboard_task is not None:
            dashboard_task.cancel()
            try:
                await dashboard_task
            except asyncio.CancelledError:
                pass

        for brain in brains:
            await brain.destroy()
        logger.info("Demo colony stopped")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
