"""GET /api/v1/state — the live fly and targets (polled by UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from flysim.api.dependencies import get_engine_manager
from flysim.api.engine_manager import EngineManager
from flysim.api.schemas import (
    EventSchema,
    EventsResponse,
    SimulationStats,
    WorldStateResponse,
)

router = APIRouter()


@router.get("/state", response_model=WorldStateResponse, response_model_by_alias=True)
def get_state(
    manager: EngineManager = Depends(get_engine_manager),
) -> WorldStateResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")

    return WorldStateResponse.from_snapshot(
        snapshot,
        tick=snapshot.tick,
        clock=snapshot.clock,
        behavior=snapshot.behavior.name,
    )


@router.get("/events", response_model=EventsResponse)
def get_events(
    since_tick: int | None = Query(None, ge=0, description="Only return events since this tick"),
    limit: int = Query(50, ge=1, le=500, description="Most recent events to return when no tick is given"),
    manager: EngineManager = Depends(get_engine_manager),
) -> EventsResponse:
    log = manager.event_log
    recent = log.latest(limit) if since_tick is None else log.since_tick(since_tick)
    events = [
        EventSchema(
            tick=ev.tick,
            category=ev.category,
            message=ev.message,
            target_ids=list(ev.target_ids),
        )
        for ev in recent
    ]
    return EventsResponse(since_tick=since_tick, events=events)


@router.get("/stats", response_model=SimulationStats)
def get_stats(
    manager: EngineManager = Depends(get_engine_manager),
) -> SimulationStats:
    snapshot = manager.get_snapshot()
    return SimulationStats(
        tick=snapshot.tick if snapshot else 0,
        clock=snapshot.clock if snapshot else 0.0,
        target_count=len(snapshot.targets) if snapshot else 0,
        total_spawned=manager.total_spawned,
        total_consumed=manager.total_consumed,
        running=manager.running,
        paused=manager.paused,
    )
