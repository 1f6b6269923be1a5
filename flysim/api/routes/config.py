"""GET /api/v1/config — expose simulation configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from flysim.api.dependencies import get_engine_manager
from flysim.api.engine_manager import EngineManager
from flysim.api.schemas import SimulationConfigResponse

router = APIRouter()


@router.get("/config", response_model=SimulationConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> SimulationConfigResponse:
    cfg = manager.config
    return SimulationConfigResponse(
        arena_width=cfg.arena_width,
        min_height=cfg.min_height,
        max_height=cfg.max_height,
        walk_speed=cfg.walk_speed,
        fly_speed=cfg.fly_speed,
        turn_rate=cfg.turn_rate,
        detection_radius=cfg.detection_radius,
        interaction_radius=cfg.interaction_radius,
        target_capacity=cfg.target_capacity,
        spawn_interval=cfg.spawn_interval,
        stall_threshold=cfg.stall_threshold,
        tick_interval=manager.tick_rate,
        broadcast_interval=cfg.broadcast_interval,
    )
