"""POST /api/v1/control/{action}: simulation lifecycle controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, Query

from mazerun.api.dependencies import get_engine_manager
from mazerun.api.engine_manager import EngineManager
from mazerun.api.schemas import ControlResponse

router = APIRouter()


class ControlAction(str, Enum):
    start = "start"
    pause = "pause"
    resume = "resume"
    step = "step"
    reset = "reset"


def _now(manager: EngineManager) -> int:
    snapshot = manager.get_snapshot()
    return snapshot.time_ms if snapshot else 0


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    match action:
        case ControlAction.start:
            if manager.running:
                return ControlResponse(status="noop", message="Already running.", time_ms=_now(manager))
            manager.start()
            return ControlResponse(status="ok", message="Simulation started.", time_ms=_now(manager))

        case ControlAction.pause:
            if not manager.running:
                return ControlResponse(status="error", message="Not running.", time_ms=_now(manager))
            manager.pause()
            return ControlResponse(status="ok", message="Simulation paused.", time_ms=_now(manager))

        case ControlAction.resume:
            if not manager.running:
                return ControlResponse(status="error", message="Not running.", time_ms=_now(manager))
            manager.resume()
            return ControlResponse(status="ok", message="Simulation resumed.", time_ms=_now(manager))

        case ControlAction.step:
            manager.step()
            return ControlResponse(status="ok", message="Single step executed.", time_ms=_now(manager))

        case ControlAction.reset:
            manager.reset()
            return ControlResponse(status="ok", message="Simulation reset.", time_ms=_now(manager))


@router.post("/speed")
def set_speed(
    factor: float = Query(1.0, ge=0.1, le=10.0, description="Virtual ms per real ms"),
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    manager.speed = factor
    return ControlResponse(status="ok", message=f"Speed set to {factor:.1f}x.", time_ms=_now(manager))
