"""EngineManager — owns the WorldLoop thread on behalf of the HTTP host.

Only the engine thread calls ``WorldLoop.advance``. Request handlers read
the last published Snapshot, which is swapped under a lock at the end of
every tick. Elapsed time per tick comes from ``time.monotonic()``, so an
oversleeping thread still feeds the engine real wall-clock deltas (and a
long hiccup shows up as a stall).
"""

from __future__ import annotations

import logging
import threading
import time
from collections import Counter
from typing import TYPE_CHECKING

from flysim.core.snapshot import Snapshot
from flysim.engine.world_loop import WorldLoop
from flysim.utils.event_log import EventLog

if TYPE_CHECKING:
    from flysim.config import SimulationConfig

logger = logging.getLogger(__name__)

_PAUSE_POLL = 0.01
_JOIN_TIMEOUT = 5.0


class EngineManager:
    """Background runner for one simulation.

    Control methods may be called from any thread:
      start   spawn the engine thread (no-op if it is alive)
      pause   keep the thread but stop advancing
      resume  continue, without simulating the paused span
      step    advance exactly one ``tick_rate`` while paused
      stop    halt and join the thread
      reset   stop, drop all history, build a fresh world
    """

    def __init__(self, config: SimulationConfig) -> None:
        self.config = config
        self._tick_rate: float = config.tick_interval

        self._world_loop: WorldLoop | None = None
        self._publish_lock = threading.Lock()
        self._published: Snapshot | None = None
        self._event_log = EventLog(config.event_log_size)
        self._totals: Counter[str] = Counter()

        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._single_step = threading.Event()
        self._halt = threading.Event()
        self._last_tick_at: float = 0.0

        self._build()

    # -- state --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.001, min(value, 1.0))

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def total_spawned(self) -> int:
        return self._totals["spawn"]

    @property
    def total_consumed(self) -> int:
        return self._totals["consume"]

    def get_snapshot(self) -> Snapshot | None:
        with self._publish_lock:
            return self._published

    # -- control --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._halt.clear()
        self._paused.clear()
        self._running.set()
        self._last_tick_at = time.monotonic()
        self._thread = threading.Thread(target=self._run, name="engine-loop", daemon=True)
        self._thread.start()
        logger.info("Engine started, tick every %.3fs", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("Engine paused at tick %d", self._tick())

    def resume(self) -> None:
        self._last_tick_at = time.monotonic()
        self._paused.clear()
        logger.info("Engine resumed at tick %d", self._tick())

    def step(self) -> None:
        """Queue one fixed-size tick; pauses first if needed."""
        if not self._paused.is_set():
            self.pause()
        self._single_step.set()

    def stop(self) -> None:
        self._halt.set()
        self._paused.clear()
        self._running.clear()
        if self._thread is not None and self._thread.is_alive():
            self._thread.join(timeout=_JOIN_TIMEOUT)
        self._thread = None
        logger.info("Engine stopped at tick %d", self._tick())

    def reset(self) -> None:
        """Stop and rebuild the world; ``start`` must be called again."""
        self.stop()
        self._event_log.clear()
        self._totals.clear()
        self._build()
        logger.info("Engine reset with a fresh world.")

    # -- engine thread --

    def _build(self) -> None:
        self._world_loop = WorldLoop(self.config)
        self._publish()

    def _run(self) -> None:
        loop = self._world_loop
        assert loop is not None
        logger.info("Engine thread up.")
        try:
            while not self._halt.is_set():
                if self._paused.is_set() and not self._single_step.is_set():
                    self._halt.wait(_PAUSE_POLL)
                    continue

                now = time.monotonic()
                if self._single_step.is_set():
                    self._single_step.clear()
                    elapsed = self._tick_rate
                else:
                    elapsed = now - self._last_tick_at
                self._last_tick_at = now

                loop.advance(elapsed)
                self._publish()
                self._halt.wait(self._tick_rate)
        except Exception:
            logger.exception("Engine thread died at tick %d.", self._tick())
        finally:
            self._running.clear()
            logger.info("Engine thread down.")

    def _publish(self) -> None:
        """Expose the newest snapshot and fold the tick's events into the log."""
        loop = self._world_loop
        assert loop is not None
        snapshot = loop.snapshot()
        with self._publish_lock:
            self._published = snapshot

        events = loop.tick_events
        if events:
            self._event_log.append_many(events)
            self._totals.update(e.category for e in events)

    def _tick(self) -> int:
        return self._world_loop.world.tick if self._world_loop else 0
