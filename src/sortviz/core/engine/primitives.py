from __future__ import annotations

import asyncio
from typing import Sequence

from sortviz.algorithms.base import HighlightTag, Number
from sortviz.core.engine.errors import RunCancelled
from sortviz.core.engine.monitor import PerformanceMonitor
from sortviz.core.engine.state import EngineState
from sortviz.core.engine.timing import delay_for_speed
from sortviz.rendering.sink import GuardedSink


class StepGate:
    """
    Single-slot latch for step mode.

    wait() parks the current compare; release() frees exactly one parked
    compare and is a no-op when nothing is parked.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._waiting = False

    @property
    def waiting(self) -> bool:
        return self._waiting

    async def wait(self) -> None:
        self._event.clear()
        self._waiting = True
        try:
            await self._event.wait()
        finally:
            self._waiting = False

    def release(self) -> bool:
        if not self._waiting:
            return False
        # Clear before the waiter resumes so a second release is a no-op
        self._waiting = False
        self._event.set()
        return True

    def open(self) -> None:
        """
        Wake any waiter regardless of accounting (used by stop()).
        """
        self._waiting = False
        self._event.set()


class StepPrimitives:
    """
    Engine-side implementation of the Primitives protocol for one run.

    Every primitive:
      1. raises RunCancelled if the run is stopped
      2. polls while paused
      3. applies its effect, reports to the sink and monitor, then sleeps

    Sleeps are sliced by the poll interval so stop() lands within one
    interval even at speed 1.
    """

    def __init__(
        self,
        *,
        state: EngineState,
        monitor: PerformanceMonitor,
        sink: GuardedSink,
        gate: StepGate,
        poll_interval: float,
        delay_scale: float = 1.0,
    ) -> None:
        self._state = state
        self._monitor = monitor
        self._sink = sink
        self._gate = gate
        self._poll_interval = poll_interval
        self._delay_scale = delay_scale

    # ---------------- Reads ----------------

    @property
    def size(self) -> int:
        return len(self._state.array)

    def peek(self, index: int) -> Number:
        return self._state.array[index]

    def should_stop(self) -> bool:
        return self._state.stopped

    # ---------------- Primitives ----------------

    async def compare(self, i: int, j: int, *, operands: tuple[Number, Number] | None = None) -> bool:
        await self._enter()

        arr = self._state.array
        a, b = operands if operands is not None else (arr[i], arr[j])

        self._monitor.record_comparison()
        self._state.comparisons += 1
        self._state.accesses += 2
        self._state.current_step += 1

        self._sink.set_elements_state((i, j), "comparing")
        await self._suspend(self._delay())

        if self._state.mode == "step":
            await self._gate.wait()
            self._check_stopped()

        self._sink.set_elements_state((i, j), "default")
        return a > b

    async def swap(self, i: int, j: int) -> None:
        await self._enter()

        arr = self._state.array
        arr[i], arr[j] = arr[j], arr[i]

        self._monitor.record_swap()
        self._state.swaps += 1
        self._state.accesses += 4
        self._state.current_step += 1

        self._sink.set_elements_state((i, j), "swapping")
        self._sink.swap_elements(i, j)
        await self._suspend(self._delay())
        self._sink.set_elements_state((i, j), "default")

    async def set(self, index: int, value: Number) -> None:
        await self._enter()

        self._state.array[index] = value

        self._monitor.record_access(2)
        self._state.accesses += 2
        self._state.current_step += 1

        self._sink.write_element(index, value)
        await self._suspend(self._delay() / 2)

    async def highlight(self, indices: Sequence[int], tag: HighlightTag) -> None:
        await self._enter()
        self._sink.set_elements_state(indices, tag)

    async def mark_sorted(self, indices: Sequence[int]) -> None:
        await self._enter()
        self._sink.set_elements_state(indices, "sorted")
        await self._suspend(self._delay() / 4)

    # ---------------- Internals ----------------

    def _delay(self) -> float:
        # Read on every call so set_speed() applies to the next primitive
        return delay_for_speed(self._state.speed) * self._delay_scale

    def _check_stopped(self) -> None:
        if self._state.stopped:
            raise RunCancelled()

    async def _enter(self) -> None:
        self._check_stopped()
        while self._state.paused and not self._state.stopped:
            await asyncio.sleep(self._poll_interval)
        self._check_stopped()

    async def _suspend(self, seconds: float) -> None:
        if seconds <= 0:
            # Still yield so stop()/pause() from other tasks get a turn
            await asyncio.sleep(0)
            self._check_stopped()
            return

        remaining = seconds
        while remaining > 1e-9:
            self._check_stopped()
            chunk = min(remaining, self._poll_interval)
            await asyncio.sleep(chunk)
            remaining -= chunk
        self._check_stopped()
