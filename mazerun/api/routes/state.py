"""GET /api/v1/state: dynamic game data (polled by the UI every tick)."""

from __future__ import annotations

from typing import Iterable

from fastapi import APIRouter, Depends, HTTPException, Query

from mazerun.api.dependencies import get_engine_manager
from mazerun.api.engine_manager import EngineManager
from mazerun.api.schemas import (
    AdversarySchema,
    CellSchema,
    EventSchema,
    GameStateResponse,
    PlayerSchema,
    RoundSchema,
    SimulationStats,
)
from mazerun.core.models import Vector2

router = APIRouter()


def _cells(positions: Iterable[Vector2]) -> list[CellSchema]:
    return [CellSchema(x=p.x, y=p.y) for p in positions]


@router.get("/state", response_model=GameStateResponse)
def get_state(
    since_ms: int = Query(0, ge=0, description="Only return events at or after this virtual time"),
    manager: EngineManager = Depends(get_engine_manager),
) -> GameStateResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")

    return GameStateResponse(
        time_ms=snapshot.time_ms,
        maze_epoch=snapshot.maze_epoch,
        player=PlayerSchema(
            x=snapshot.player_pos.x,
            y=snapshot.player_pos.y,
            has_power=snapshot.has_power,
            power_ticks_remaining=snapshot.power_ticks_remaining,
        ),
        round=RoundSchema(
            ticks_remaining=snapshot.ticks_remaining,
            dimension=snapshot.dimension.name.lower(),
            outcome=snapshot.outcome.name.lower(),
            loss_cause=snapshot.loss_cause.name.lower(),
        ),
        portals=_cells(snapshot.portals),
        hazards=_cells(snapshot.hazards),
        power_items=_cells(snapshot.power_items),
        adversaries=[
            AdversarySchema(x=pos.x, y=pos.y, kind=kind.name.lower())
            for pos, kind in snapshot.adversaries
        ],
        events=[
            EventSchema(time_ms=ev.time_ms, category=ev.category, message=ev.message)
            for ev in manager.event_log.since(since_ms)
        ],
    )


@router.get("/stats", response_model=SimulationStats)
def get_stats(
    manager: EngineManager = Depends(get_engine_manager),
) -> SimulationStats:
    snapshot = manager.get_snapshot()
    return SimulationStats(
        time_ms=snapshot.time_ms if snapshot else 0,
        maze_epoch=snapshot.maze_epoch if snapshot else 0,
        rounds_won=manager.rounds_won,
        rounds_lost=manager.rounds_lost,
        running=manager.running,
        paused=manager.paused,
    )
