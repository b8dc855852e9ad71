from __future__ import annotations

import asyncio
import secrets
import time
from contextlib import aclosing
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

import structlog

from sortviz.algorithms.base import Complete, Number, StepDescriptor
from sortviz.algorithms.registry import AlgorithmEntry, algorithm_names, get_algorithm
from sortviz.core.config.settings import EngineSettings
from sortviz.core.config.settings import settings as default_settings
from sortviz.core.engine.errors import RunCancelled
from sortviz.core.engine.lifecycle import RunLifecycle
from sortviz.core.engine.monitor import PerformanceMetrics, PerformanceMonitor
from sortviz.core.engine.primitives import StepGate, StepPrimitives
from sortviz.core.engine.state import EngineSnapshot, EngineState
from sortviz.core.engine.timing import clamp_speed
from sortviz.core.events.bus import EventBus
from sortviz.core.events.system import StepObserved
from sortviz.core.logging.setup import clear_context
from sortviz.core.run.result import ExecutionResult
from sortviz.core.run.spec import ExecutionConfig
from sortviz.data.generator import generate, validate_array
from sortviz.rendering.sink import GuardedSink, RenderSink

log = structlog.get_logger()

StepObserver = Callable[[EngineSnapshot], None]


@dataclass(frozen=True, slots=True)
class PreparedRun:
    """
    A validated run that has not started yet.
    """

    run_id: str
    entry: AlgorithmEntry
    config: ExecutionConfig
    values: tuple[Number, ...]


def new_run_id() -> str:
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    return f"{timestamp}_{secrets.token_hex(4)}"


class SortController:
    """
    Drives one sorting sequence at a time and exposes its controls.

    - run() validates, then drives the sequence until it completes or is stopped
    - pause/resume/stop/step/set_speed only flip state; the step primitives
      of the active run observe it at their next synchronization point
    - runs hold a single slot: a new run() stops the holder and waits for it
      to unwind; of several waiters only the most recent one runs, the
      others come back unstarted with success=False

    Each run owns its EngineState and PerformanceMonitor; `monitor` and
    get_state() always refer to the run holding the slot (or the last one).

    The controller is owned by its caller (an app, a test, a script);
    nothing about it is global.
    """

    def __init__(
        self,
        *,
        settings: EngineSettings | None = None,
        sink: RenderSink | None = None,
        bus: EventBus | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._settings = settings if settings is not None else default_settings
        self._sink = GuardedSink(sink)
        self._bus = bus if bus is not None else EventBus()
        self._clock = clock

        self._monitor = PerformanceMonitor(clock=clock)
        self._state = self._idle_state()
        self._lifecycle = RunLifecycle(bus=self._bus, state=self._state)
        self._gate = StepGate()
        self._last_result: ExecutionResult | None = None

        self._slot = asyncio.Lock()
        self._generation = 0

    # ---------------- Properties ----------------

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def monitor(self) -> PerformanceMonitor:
        return self._monitor

    @property
    def sink(self) -> RenderSink:
        return self._sink.inner

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def last_result(self) -> ExecutionResult | None:
        return self._last_result

    @property
    def is_running(self) -> bool:
        return self._state.running

    @property
    def is_paused(self) -> bool:
        return self._state.paused

    @property
    def awaiting_step(self) -> bool:
        """
        True while a compare is parked waiting for step().
        """
        return self._gate.waiting

    @property
    def speed(self) -> int:
        return self._state.speed

    # ---------------- Public operations ----------------

    def get_available_algorithms(self) -> list[str]:
        return algorithm_names()

    def get_state(self) -> EngineSnapshot:
        if self._state.running:
            self._state.elapsed_time = self._monitor.elapsed()
        return self._state.snapshot()

    def get_metrics(self) -> PerformanceMetrics:
        return self._monitor.snapshot()

    def pause(self) -> None:
        self._lifecycle.pause()

    def resume(self) -> None:
        self._lifecycle.resume()

    def stop(self) -> None:
        if self._lifecycle.request_stop():
            # Wake a compare parked in step mode so it can unwind
            self._gate.open()

    def step(self) -> None:
        self._gate.release()

    def set_speed(self, speed: int) -> None:
        self._state.speed = clamp_speed(speed)
        log.debug("engine.speed_changed", speed=self._state.speed)

    def reset(self) -> None:
        """
        Stop the active run and show an idle engine.

        The stopped run keeps its own state and monitor while it unwinds and
        still holds the slot, so the next run() waits for it.
        """
        self.stop()
        self._monitor = PerformanceMonitor(clock=self._clock)
        self._state = self._idle_state()
        self._lifecycle = RunLifecycle(bus=self._bus, state=self._state)
        self._gate = StepGate()
        self._sink.reset()

    async def run(
        self,
        algorithm_name: str,
        config: ExecutionConfig | Mapping[str, Any] | None = None,
        *,
        on_step: Optional[StepObserver] = None,
    ) -> ExecutionResult:
        """
        Run `algorithm_name` to completion or cancellation.

        Raises UnknownAlgorithm / InvalidArray before touching any state.
        Cancellation and internal faults come back as success=False.
        """
        prepared = self.prepare(algorithm_name, config)
        return await self.run_prepared(prepared, on_step=on_step)

    def prepare(
        self,
        algorithm_name: str,
        config: ExecutionConfig | Mapping[str, Any] | None = None,
    ) -> PreparedRun:
        """
        Validate a run without starting it. Raises UnknownAlgorithm / InvalidArray.
        """
        entry = get_algorithm(algorithm_name)
        cfg = self._coerce_config(config)
        values = self._prepare_input(entry, cfg)
        return PreparedRun(run_id=new_run_id(), entry=entry, config=cfg, values=tuple(values))

    async def run_prepared(self, prepared: PreparedRun, *, on_step: Optional[StepObserver] = None) -> ExecutionResult:
        self._generation += 1
        ticket = self._generation

        if self._state.running:
            log.info("engine.preempting_run", run_id=self._state.run_id, by=prepared.run_id)
        self.stop()

        async with self._slot:
            if ticket != self._generation:
                return self._superseded(prepared)
            return await self._execute(prepared, on_step)

    # ---------------- Internals ----------------

    def _idle_state(self) -> EngineState:
        return EngineState(speed=self._settings.default_speed, mode=self._settings.default_mode)

    def _coerce_config(self, config: ExecutionConfig | Mapping[str, Any] | None) -> ExecutionConfig:
        if config is None:
            return ExecutionConfig(speed=self._settings.default_speed, mode=self._settings.default_mode)
        if isinstance(config, ExecutionConfig):
            return config
        return ExecutionConfig.model_validate(dict(config))

    def _prepare_input(self, entry: AlgorithmEntry, cfg: ExecutionConfig) -> list[Number]:
        if cfg.input_array is not None:
            raw: list[Number] = list(cfg.input_array)
        else:
            size = cfg.input_size if cfg.input_size is not None else self._settings.default_input_size
            seed = cfg.seed if cfg.seed is not None else self._settings.default_seed
            raw = list(generate(size, cfg.input_pattern, seed=seed))

        return validate_array(
            raw,
            max_size=self._settings.max_array_size,
            integers_only=entry.info.integers_only,
            max_range=self._settings.max_counting_range if entry.name == "counting-sort" else None,
        )

    def _superseded(self, prepared: PreparedRun) -> ExecutionResult:
        log.info("engine.run_superseded", run_id=prepared.run_id, algorithm=prepared.entry.name)
        return ExecutionResult(
            run_id=prepared.run_id,
            algorithm_name=prepared.entry.name,
            success=False,
            final_array=prepared.values,
            total_comparisons=0,
            total_swaps=0,
            total_accesses=0,
            total_time=0.0,
            total_steps=0,
        )

    async def _execute(self, prepared: PreparedRun, on_step: Optional[StepObserver]) -> ExecutionResult:
        # Called with the slot held; nothing below awaits before _drive starts the lifecycle
        entry, cfg = prepared.entry, prepared.config

        state = EngineState(
            run_id=prepared.run_id,
            algorithm_name=entry.name,
            array=list(prepared.values),
            speed=cfg.speed,
            mode=cfg.mode,
        )
        lifecycle = RunLifecycle(bus=self._bus, state=state)
        gate = StepGate()
        monitor = PerformanceMonitor(clock=self._clock)

        self._state, self._lifecycle, self._gate, self._monitor = state, lifecycle, gate, monitor

        primitives = StepPrimitives(
            state=state,
            monitor=monitor,
            sink=self._sink,
            gate=gate,
            poll_interval=self._settings.pause_poll_interval,
            delay_scale=self._settings.delay_scale,
        )
        estimate = entry.info.estimate_steps(len(prepared.values))

        self._sink.initialize(state.array)
        monitor.start()

        try:
            failure = await self._drive(entry, primitives, state, monitor, lifecycle, estimate, on_step)
            monitor.stop()
            state.elapsed_time = monitor.elapsed()
            failure = self._settle(state, monitor, lifecycle, failure)
        finally:
            monitor.stop()
            state.running = False
            state.paused = False
            clear_context()

        result = ExecutionResult(
            run_id=state.run_id,
            algorithm_name=state.algorithm_name,
            success=failure is None and state.completed and not state.stopped,
            final_array=tuple(state.array),
            total_comparisons=state.comparisons,
            total_swaps=state.swaps,
            total_accesses=state.accesses,
            total_time=monitor.elapsed(),
            total_steps=state.total_steps_observed,
            error=f"{type(failure).__name__}: {failure}" if failure is not None else None,
        )
        self._last_result = result
        return result

    async def _drive(
        self,
        entry: AlgorithmEntry,
        primitives: StepPrimitives,
        state: EngineState,
        monitor: PerformanceMonitor,
        lifecycle: RunLifecycle,
        estimate: int,
        on_step: Optional[StepObserver],
    ) -> Exception | None:
        try:
            lifecycle.start()
            async with aclosing(entry.sequence(primitives)) as steps:
                async for step in steps:
                    self._observe(state, monitor, step, estimate, on_step)
                    if state.stopped:
                        break
        except RunCancelled:
            return None
        except Exception as exc:
            log.exception("engine.crashed", run_id=state.run_id, algorithm=state.algorithm_name)
            return exc
        return None

    def _observe(
        self,
        state: EngineState,
        monitor: PerformanceMonitor,
        step: StepDescriptor,
        estimate: int,
        on_step: Optional[StepObserver],
    ) -> None:
        state.total_steps_observed += 1
        state.elapsed_time = monitor.elapsed()
        if not isinstance(step, Complete):
            state.progress = min(99.0, 100.0 * state.current_step / estimate)

        self._bus.publish(
            StepObserved.create(
                run_id=state.run_id,
                kind=step.kind,
                indices=step.indices,
                current_step=state.current_step,
                comparisons=state.comparisons,
                swaps=state.swaps,
                progress=state.progress,
                sequence=state.next_sequence(),
            )
        )

        if on_step is not None:
            on_step(state.snapshot())

    def _settle(
        self,
        state: EngineState,
        monitor: PerformanceMonitor,
        lifecycle: RunLifecycle,
        failure: Exception | None,
    ) -> Exception | None:
        try:
            if failure is not None:
                lifecycle.finish_failed(failure)
            elif state.stopped:
                lifecycle.finish_stopped()
            else:
                self._sink.set_elements_state(range(len(state.array)), "sorted")
                lifecycle.finish_completed(
                    comparisons=state.comparisons,
                    swaps=state.swaps,
                    accesses=monitor.accesses,
                    total_time=state.elapsed_time,
                )
        except Exception as exc:
            log.exception("engine.settle_failed", run_id=state.run_id)
            return failure if failure is not None else exc
        return failure
