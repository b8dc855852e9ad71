from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True, slots=True)
class PerformanceMetrics:
    """
    Snapshot of the monitor. time_elapsed is live until stop() is called.
    """

    comparisons: int
    swaps: int
    memory_accesses: int
    time_elapsed: float
    start_time: float | None
    end_time: float | None

    @property
    def finished(self) -> bool:
        return self.end_time is not None


def format_elapsed(seconds: float) -> str:
    """
    Human-readable duration: "742ms", "3.25s", "2m 5.0s".
    """
    ms = seconds * 1000.0
    if ms < 1000:
        return f"{ms:.0f}ms"
    if ms < 60_000:
        return f"{ms / 1000:.2f}s"
    minutes = int(ms // 60_000)
    rest = (ms % 60_000) / 1000
    return f"{minutes}m {rest:.1f}s"


class PerformanceMonitor:
    """
    Counts comparisons, swaps and memory accesses of one run and times it.

    A compare reads two elements, a swap reads two and writes two; both are
    folded into memory_accesses here so callers only record the operation.
    """

    def __init__(self, *, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self.reset()

    def reset(self) -> None:
        self._comparisons = 0
        self._swaps = 0
        self._accesses = 0
        self._start: float | None = None
        self._end: float | None = None

    # ---------------- Lifecycle ----------------

    def start(self) -> None:
        self.reset()
        self._start = self._clock()

    def stop(self) -> None:
        if self._start is None or self._end is not None:
            return
        self._end = self._clock()

    @property
    def started(self) -> bool:
        return self._start is not None

    # ---------------- Recording ----------------

    def record_comparison(self) -> None:
        self._comparisons += 1
        self._accesses += 2

    def record_swap(self) -> None:
        self._swaps += 1
        self._accesses += 4

    def record_access(self, count: int = 1) -> None:
        self._accesses += count

    # ---------------- Reading ----------------

    @property
    def comparisons(self) -> int:
        return self._comparisons

    @property
    def swaps(self) -> int:
        return self._swaps

    @property
    def accesses(self) -> int:
        return self._accesses

    def elapsed(self) -> float:
        if self._start is None:
            return 0.0
        end = self._end if self._end is not None else self._clock()
        return end - self._start

    def snapshot(self) -> PerformanceMetrics:
        return PerformanceMetrics(
            comparisons=self._comparisons,
            swaps=self._swaps,
            memory_accesses=self._accesses,
            time_elapsed=self.elapsed(),
            start_time=self._start,
            end_time=self._end,
        )

    def format_elapsed(self) -> str:
        return format_elapsed(self.elapsed())

    def summary(self) -> dict[str, str]:
        return {
            "comparisons": f"{self._comparisons:,}",
            "swaps": f"{self._swaps:,}",
            "accesses": f"{self._accesses:,}",
            "time": self.format_elapsed(),
        }

    def formatted_stats(self) -> str:
        s = self.summary()
        return "\n".join(
            [
                f"Comparisons: {s['comparisons']}",
                f"Swaps: {s['swaps']}",
                f"Memory Accesses: {s['accesses']}",
                f"Time: {s['time']}",
            ]
        )
