"""POST /api/v1/input/{direction}: queue a player intent."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from mazerun.api.dependencies import get_engine_manager
from mazerun.api.engine_manager import EngineManager
from mazerun.api.schemas import InputResponse
from mazerun.core.enums import Direction

router = APIRouter()


class DirectionParam(str, Enum):
    up = "up"
    down = "down"
    left = "left"
    right = "right"


@router.post("/input/{direction}", response_model=InputResponse)
def submit_input(
    direction: DirectionParam,
    manager: EngineManager = Depends(get_engine_manager),
) -> InputResponse:
    # Outside PLAYING the engine ignores intents; only a stopped clock refuses them.
    accepted = manager.submit_intent(Direction[direction.name.upper()])
    snapshot = manager.get_snapshot()
    return InputResponse(
        status="queued" if accepted else "dropped",
        direction=direction.value,
        time_ms=snapshot.time_ms if snapshot else 0,
    )
