from __future__ import annotations

import structlog

from sortviz.core.engine.state import EngineState
from sortviz.core.events.bus import EventBus
from sortviz.core.events.system import (
    EngineError,
    RunCompleted,
    RunPaused,
    RunResumed,
    RunStarted,
    RunStopped,
)
from sortviz.core.logging.setup import bind_context

log = structlog.get_logger()


class RunLifecycle:
    """
    Explicit run lifecycle: idle -> running -> {paused <-> running} -> completed | stopped.

    Every transition is checked, published on the bus and logged.
    """

    def __init__(self, *, bus: EventBus, state: EngineState) -> None:
        self._bus = bus
        self._state = state

    @property
    def state(self) -> EngineState:
        return self._state

    def start(self) -> None:
        s = self._state
        if s.running:
            raise RuntimeError("run already started")
        if s.completed or s.stopped:
            raise RuntimeError("run already finished; start a new run instead")

        bind_context(run_id=s.run_id, algorithm=s.algorithm_name)

        s.running = True

        self._bus.publish(
            RunStarted.create(
                run_id=s.run_id,
                algorithm=s.algorithm_name,
                size=len(s.array),
                speed=s.speed,
                mode=s.mode,
                sequence=s.next_sequence(),
            )
        )

        log.info("engine.run_started", run_id=s.run_id, algorithm=s.algorithm_name, size=len(s.array))

    def pause(self) -> bool:
        s = self._state
        if not s.running or s.paused or s.stopped:
            return False

        s.paused = True
        self._bus.publish(RunPaused.create(run_id=s.run_id, sequence=s.next_sequence()))
        log.info("engine.run_paused", run_id=s.run_id)
        return True

    def resume(self) -> bool:
        s = self._state
        if not s.running or not s.paused or s.stopped:
            return False

        s.paused = False
        self._bus.publish(RunResumed.create(run_id=s.run_id, sequence=s.next_sequence()))
        log.info("engine.run_resumed", run_id=s.run_id)
        return True

    def request_stop(self) -> bool:
        """
        Flag the run as stopped. Primitives observe the flag and unwind;
        finish_stopped() is called once they have.
        """
        s = self._state
        if not s.running or s.stopped:
            return False

        s.stopped = True
        s.paused = False
        log.info("engine.stop_requested", run_id=s.run_id)
        return True

    def finish_completed(self, *, comparisons: int, swaps: int, accesses: int, total_time: float) -> None:
        s = self._state
        s.running = False
        s.completed = True
        s.progress = 100.0

        self._bus.publish(
            RunCompleted.create(
                run_id=s.run_id,
                comparisons=comparisons,
                swaps=swaps,
                accesses=accesses,
                total_time=total_time,
                sequence=s.next_sequence(),
            )
        )

        log.info(
            "engine.run_completed",
            run_id=s.run_id,
            comparisons=comparisons,
            swaps=swaps,
            accesses=accesses,
            total_time=total_time,
        )

    def finish_stopped(self) -> None:
        s = self._state
        s.running = False
        s.paused = False
        s.stopped = True

        self._bus.publish(RunStopped.create(run_id=s.run_id, sequence=s.next_sequence()))
        log.info("engine.run_stopped", run_id=s.run_id, comparisons=s.comparisons, swaps=s.swaps)

    def finish_failed(self, exc: BaseException) -> None:
        s = self._state
        s.running = False
        s.paused = False

        self._bus.publish(
            EngineError.create(
                run_id=s.run_id,
                error_type=type(exc).__name__,
                error_message=str(exc),
                sequence=s.next_sequence(),
            )
        )
