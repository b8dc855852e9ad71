from __future__ import annotations

import pytest

from sortviz.core.engine.monitor import PerformanceMonitor, format_elapsed
from sortviz.core.engine.timing import SPEED_DELAYS_MS, clamp_speed, delay_for_speed


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_speed_table_endpoints() -> None:
    assert delay_for_speed(1) == pytest.approx(1.0)
    assert delay_for_speed(10) == pytest.approx(0.01)
    assert delay_for_speed(5) == pytest.approx(0.25)


def test_speed_table_is_monotonic() -> None:
    delays = [SPEED_DELAYS_MS[s] for s in range(1, 11)]
    assert delays == sorted(delays, reverse=True)


def test_speed_is_clamped() -> None:
    assert clamp_speed(0) == 1
    assert clamp_speed(-3) == 1
    assert clamp_speed(11) == 10
    assert delay_for_speed(99) == delay_for_speed(10)


def test_monitor_counts_accesses_per_operation() -> None:
    monitor = PerformanceMonitor()
    monitor.start()

    monitor.record_comparison()
    monitor.record_comparison()
    monitor.record_swap()
    monitor.record_access(3)

    assert monitor.comparisons == 2
    assert monitor.swaps == 1
    assert monitor.accesses == 2 * 2 + 4 + 3


def test_monitor_timing_freezes_on_stop() -> None:
    clock = FakeClock()
    monitor = PerformanceMonitor(clock=clock)

    assert not monitor.started
    assert monitor.elapsed() == 0.0

    monitor.start()
    clock.now += 1.5
    assert monitor.elapsed() == pytest.approx(1.5)

    monitor.stop()
    clock.now += 10
    assert monitor.elapsed() == pytest.approx(1.5)

    # Second stop keeps the first end time
    monitor.stop()
    assert monitor.snapshot().end_time == pytest.approx(101.5)
    assert monitor.snapshot().finished


def test_monitor_start_resets_counters() -> None:
    monitor = PerformanceMonitor()
    monitor.start()
    monitor.record_swap()
    monitor.start()

    assert monitor.swaps == 0
    assert monitor.accesses == 0


def test_format_elapsed() -> None:
    assert format_elapsed(0.742) == "742ms"
    assert format_elapsed(3.25) == "3.25s"
    assert format_elapsed(125.0) == "2m 5.0s"


def test_summary_uses_thousands_separators() -> None:
    monitor = PerformanceMonitor()
    monitor.start()
    for _ in range(1234):
        monitor.record_comparison()

    summary = monitor.summary()
    assert summary["comparisons"] == "1,234"
    assert summary["accesses"] == "2,468"
    assert "Comparisons: 1,234" in monitor.formatted_stats()
