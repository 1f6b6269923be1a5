"""POST /api/v1/control/* — drive the engine thread from the outside."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, Query

from flysim.api.dependencies import get_engine_manager
from flysim.api.engine_manager import EngineManager
from flysim.api.schemas import ControlResponse

router = APIRouter()


class ControlAction(str, Enum):
    start = "start"
    pause = "pause"
    resume = "resume"
    step = "step"
    reset = "reset"


def _reply(manager: EngineManager, status: str, message: str) -> ControlResponse:
    snapshot = manager.get_snapshot()
    return ControlResponse(status=status, message=message, tick=snapshot.tick if snapshot else 0)


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    match action:
        case ControlAction.start:
            if manager.running:
                return _reply(manager, "noop", "Engine already running.")
            manager.start()
            return _reply(manager, "ok", "Engine running.")

        case ControlAction.pause | ControlAction.resume if not manager.running:
            return _reply(manager, "error", "Engine is not running; start it first.")

        case ControlAction.pause:
            manager.pause()
            return _reply(manager, "ok", "Engine paused.")

        case ControlAction.resume:
            manager.resume()
            return _reply(manager, "ok", "Engine resumed.")

        case ControlAction.step:
            # Stepping a stopped engine brings the thread up paused
            if not manager.running:
                manager.start()
                manager.pause()
            manager.step()
            return _reply(manager, "ok", f"Stepping {manager.tick_rate:.3f}s.")

        case ControlAction.reset:
            manager.reset()
            return _reply(manager, "ok", "World rebuilt; engine stopped.")


@router.post("/speed", response_model=ControlResponse)
def set_speed(
    tps: float = Query(60.0, gt=1.0, le=240.0, description="Engine ticks per second"),
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    manager.tick_rate = 1.0 / tps
    return _reply(manager, "ok", f"Engine ticking at {tps:.1f}/s.")
