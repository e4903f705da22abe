"""
Meowbrain - Monitoring Server
FastAPI app providing real-time monitoring and control of a set of cat brains.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable
from dataclasses import replace
from typing import Any

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .brain import Brain
from .cognition.behavior import Environment, InteractionTarget, Position, describe_weights

logger = logging.getLogger(__name__)


class PersonalityRequest(BaseModel):
    """Request to replace (preset) or patch (traits) a personality."""

    preset: str | None = None
    traits: dict[str, float] | None = None


class MotivationAdjustRequest(BaseModel):
    """Request to adjust a drive value."""

    name: str
    delta: float


class NeedPlacedRequest(BaseModel):
    """A need or toy placed near a cat."""

    kind: str
    x: float
    y: float
    state: str | None = None


class EnvironmentRequest(BaseModel):
    """Replacement world snapshot for a brain."""

    boundaries: dict[str, float | None] | None = None
    obstacles: list[dict[str, Any]] = []
    attractors: list[dict[str, Any]] = []


class MonitoringServer:
    """
    Monitoring server for cat brains.

    Provides:
    - REST endpoints for status and control
    - WebSocket for real-time state broadcast
    """

    def __init__(self, brains: Iterable[Brain] = ()) -> None:
        """
        Initialize the monitoring server.

        Args:
            brains: Brains to expose, keyed by their id
        """
        self._brains: dict[str, Brain] = {brain.id: brain for brain in brains}
        self._app = self._create_app()
        self._clients: set[WebSocket] = set()
        self._broadcast_task: asyncio.Task[None] | None = None
        self._pending_broadcasts: set[asyncio.Task[None]] = set()
        self._running = False

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application."""
        return self._app

    @property
    def brains(self) -> dict[str, Brain]:
        return self._brains

    def add_brain(self, brain: Brain) -> None:
        self._brains[brain.id] = brain

    def remove_brain(self, brain_id: str) -> None:
        self._brains.pop(brain_id, None)

    def _get_brain(self, brain_id: str) -> Brain:
        brain = self._brains.get(brain_id)
        if brain is None:
            raise HTTPException(status_code=404, detail=f"Unknown brain: {brain_id}")
        return brain

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        app = FastAPI(
            title="Meowbrain Monitoring",
            description="Real-time monitoring and control for cat brains",
            version="0.1.0",
        )

        @app.get("/api/brains")
        async def list_brains() -> dict[str, Any]:
            """Get status of every brain."""
            return {"brains": [brain.get_status() for brain in self._brains.values()]}

        @app.get("/api/brains/{brain_id}")
        async def get_brain(brain_id: str) -> dict[str, Any]:
            """Get status of one brain."""
            return self._get_brain(brain_id).get_status()

        @app.get("/api/brains/{brain_id}/weights")
        async def get_weights(brain_id: str) -> dict[str, Any]:
            """Get the current behavior weights."""
            brain = self._get_brain(brain_id)
            return {
                "current_behavior": brain.current_behavior.value,
                "weights": describe_weights(brain.current_weights()),
            }

        @app.post("/api/brains/{brain_id}/personality")
        async def set_personality(brain_id: str, request: PersonalityRequest) -> JSONResponse:
            """Replace or patch a brain's personality."""
            brain = self._get_brain(brain_id)
            try:
                if request.preset is not None:
                    brain.set_personality(request.preset)
                elif request.traits:
                    brain.set_personality(request.traits)
                else:
                    raise ValueError("Provide a preset or traits")
                return JSONResponse(
                    {"success": True, "personality": brain.personality.get_state()}
                )
            except ValueError as e:
                return JSONResponse(
                    {"success": False, "message": str(e)},
                    status_code=400,
                )

        @app.post("/api/brains/{brain_id}/motivation")
        async def adjust_motivation(
            brain_id: str, request: MotivationAdjustRequest
        ) -> JSONResponse:
            """Adjust a drive value by delta."""
            brain = self._get_brain(brain_id)
            try:
                brain.adjust_motivation(request.name, request.delta)
                return JSONResponse(
                    {"success": True, "motivation": brain.motivation.get_state()}
                )
            except ValueError as e:
                return JSONResponse(
                    {"success": False, "message": str(e)},
                    status_code=400,
                )

        @app.post("/api/brains/{brain_id}/need")
        async def place_need(brain_id: str, request: NeedPlacedRequest) -> JSONResponse:
            """Offer a need or toy; the cat approaches it if interested."""
            brain = self._get_brain(brain_id)
            try:
                target = InteractionTarget(
                    kind=request.kind,
                    position=Position(request.x, request.y),
                    state=request.state,
                )
            except ValueError as e:
                return JSONResponse(
                    {"success": False, "message": str(e)},
                    status_code=400,
                )

            interest = brain.evaluate_interest(target)
            approaching = brain.respond_to_need(target)
            return JSONResponse(
                {
                    "success": True,
                    "approaching": approaching,
                    "interest": round(interest, 3),
                    "current_behavior": brain.current_behavior.value,
                }
            )

        @app.get("/api/brains/{brain_id}/environment")
        async def get_environment(brain_id: str) -> dict[str, Any]:
            """Get the brain's world snapshot."""
            return self._get_brain(brain_id).environment.get_state()

        @app.put("/api/brains/{brain_id}/environment")
        async def set_environment(brain_id: str, request: EnvironmentRequest) -> JSONResponse:
            """Replace the world snapshot; other agents are kept."""
            brain = self._get_brain(brain_id)
            try:
                environment = Environment.from_state(request.model_dump())
            except (TypeError, ValueError, AttributeError) as e:
                return JSONResponse(
                    {"success": False, "message": str(e)},
                    status_code=400,
                )

            brain.set_environment(
                replace(environment, other_agents=brain.environment.other_agents)
            )
            return JSONResponse(
                {
                    "success": True,
                    "environment": brain.environment.get_state(),
                    "weights": describe_weights(brain.current_weights()),
                }
            )

        @app.websocket("/ws/monitor")
        async def websocket_monitor(websocket: WebSocket) -> None:
            """WebSocket endpoint for real-time state broadcast."""
            await websocket.accept()
            self._clients.add(websocket)
            logger.info(f"Dashboard client connected ({len(self._clients)} total)")

            try:
                # Keep connection alive, handle any incoming messages
                while True:
                    try:
                        await asyncio.wait_for(websocket.receive_text(), timeout=30.0)
                    except asyncio.TimeoutError:
                        await websocket.send_json({"type": "ping"})
            except WebSocketDisconnect:
                pass
            finally:
                self._clients.discard(websocket)
                logger.info(f"Dashboard client disconnected ({len(self._clients)} total)")

        return app

    async def _send_to_all(self, message: dict[str, Any]) -> None:
        disconnected = []
        for client in list(self._clients):
            try:
                await client.send_json(message)
            except Exception:
                disconnected.append(client)

        for client in disconnected:
            self._clients.discard(client)

    async def start_broadcast_loop(self, interval: float = 0.5) -> None:
        """Broadcast every brain's status until stopped."""
        self._running = True
        logger.info("Starting monitoring broadcast loop")

        while self._running:
            if self._clients:
                try:
                    await self._send_to_all(
                        {
                            "type": "state",
                            "timestamp": time.time(),
                            "data": [brain.get_status() for brain in self._brains.values()],
                        }
                    )
                except Exception as e:
                    logger.error(f"Error in broadcast loop: {e}")

            await asyncio.sleep(interval)

    async def stop_broadcast_loop(self) -> None:
        """Stop the state broadcast loop."""
        self._running = False
        if self._broadcast_task:
            self._broadcast_task.cancel()
            try:
                await self._broadcast_task
            except asyncio.CancelledError:
                pass

    def run_broadcast_loop(self) -> asyncio.Task[None]:
        """Start the broadcast loop as a background task."""
        self._broadcast_task = asyncio.create_task(
            self.start_broadcast_loop(), name="broadcast_loop"
        )
        return self._broadcast_task

    async def broadcast_behavior_change(self, event: dict[str, Any]) -> None:
        """
        Broadcast a behavior change event to all clients.

        Args:
            event: Payload of a brain's behaviorChange event
        """
        if not self._clients:
            return

        await self._send_to_all(
            {
                "type": "behavior_change",
                "timestamp": time.time(),
                "data": event,
            }
        )

    def schedule_behavior_change(self, event: dict[str, Any]) -> asyncio.Task[None]:
        """
        Broadcast a behavior change in the background.

        Usable directly as a brain's behaviorChange handler; the task is
        held until it finishes.
        """
        task = asyncio.get_running_loop().create_task(self.broadcast_behavior_change(event))
        self._pending_broadcasts.add(task)
        task.add_done_callback(self._pending_broadcasts.discard)
        return task
