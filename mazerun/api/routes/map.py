"""GET /api/v1/map: grid of the current maze (refetch when maze_epoch changes)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from mazerun.api.dependencies import get_engine_manager
from mazerun.api.engine_manager import EngineManager
from mazerun.api.schemas import MapResponse

router = APIRouter()


@router.get("/map", response_model=MapResponse)
def get_map(manager: EngineManager = Depends(get_engine_manager)) -> MapResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="Simulation not initialized yet.")

    grid = snapshot.grid
    return MapResponse(size=grid.size, maze_epoch=snapshot.maze_epoch, grid=grid.run_length_encode())
