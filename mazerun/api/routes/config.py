"""GET /api/v1/config: expose the active maze configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from mazerun.api.dependencies import get_engine_manager
from mazerun.api.engine_manager import EngineManager
from mazerun.api.schemas import MazeConfigResponse

router = APIRouter()


@router.get("/config", response_model=MazeConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> MazeConfigResponse:
    cfg = manager.config
    return MazeConfigResponse(
        world_seed=cfg.world_seed,
        maze_size=cfg.maze_size,
        wall_probability=cfg.wall_probability,
        max_generation_attempts=cfg.max_generation_attempts,
        adversary_cap=cfg.adversary_cap,
        chase_probability=cfg.chase_probability,
        reproduction_probability=cfg.reproduction_probability,
        round_ticks=cfg.round_ticks,
        power_duration_ticks=cfg.power_duration_ticks,
        adversary_interval_ms=cfg.adversary_interval_ms,
        power_interval_ms=cfg.power_interval_ms,
        clock_interval_ms=cfg.clock_interval_ms,
        reset_delay_ms=cfg.reset_delay_ms,
        speed=manager.speed,
    )
