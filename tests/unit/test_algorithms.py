from __future__ import annotations

import asyncio
import random

import pytest

from sortviz.algorithms.base import Complete, StepDescriptor
from sortviz.algorithms.registry import ALGORITHMS, algorithm_names
from sortviz.core.engine.monitor import PerformanceMonitor
from sortviz.core.engine.primitives import StepGate, StepPrimitives
from sortviz.core.engine.state import EngineState
from sortviz.rendering.sink import GuardedSink


def drive(name: str, values: list) -> tuple[EngineState, list[StepDescriptor]]:
    """
    Run one sequence over `values` with delays disabled.
    """
    state = EngineState(run_id="test", algorithm_name=name, array=list(values), speed=10)
    ops = StepPrimitives(
        state=state,
        monitor=PerformanceMonitor(),
        sink=GuardedSink(None),
        gate=StepGate(),
        poll_interval=0.01,
        delay_scale=0.0,
    )

    async def collect() -> list[StepDescriptor]:
        return [step async for step in ALGORITHMS[name].sequence(ops)]

    steps = asyncio.run(collect())
    return state, steps


COMPARISON_SORTS = [
    "bubble-sort",
    "selection-sort",
    "insertion-sort",
    "merge-sort",
    "quick-sort",
    "heap-sort",
    "shell-sort",
]


@pytest.mark.parametrize("name", algorithm_names())
@pytest.mark.parametrize("size", [1, 2, 7, 40, 300])
def test_sorts_random_integers(name: str, size: int) -> None:
    rng = random.Random(size)
    values = [rng.randint(-50, 50) for _ in range(size)]

    state, steps = drive(name, values)

    assert state.array == sorted(values)
    assert isinstance(steps[-1], Complete)


@pytest.mark.parametrize("name", algorithm_names())
def test_handles_duplicates_and_presorted_input(name: str) -> None:
    for values in ([3, 3, 1, 1, 2, 2, 3], list(range(30)), list(range(30, 0, -1)), [7] * 12):
        state, _ = drive(name, values)
        assert state.array == sorted(values)


@pytest.mark.parametrize("name", COMPARISON_SORTS)
def test_comparison_sorts_accept_floats(name: str) -> None:
    values = [2.5, -1.25, 9.0, 0.0, 2.5, 3.75]
    state, _ = drive(name, values)
    assert state.array == sorted(values)


def test_bubble_sort_counts_for_known_input() -> None:
    state, _ = drive("bubble-sort", [5, 2, 8, 1, 9])

    assert state.array == [1, 2, 5, 8, 9]
    assert state.comparisons == 10
    assert state.swaps == 4


def test_bubble_sort_stops_early_on_sorted_input() -> None:
    state, _ = drive("bubble-sort", [1, 2, 3, 4, 5])

    assert state.comparisons == 4
    assert state.swaps == 0


def test_insertion_sort_counts_every_shift_as_a_swap() -> None:
    state, _ = drive("insertion-sort", [4, 3, 2, 1])

    # 1 + 2 + 3 shifts
    assert state.swaps == 6


def test_merge_sort_never_swaps() -> None:
    state, _ = drive("merge-sort", [9, 4, 7, 1, 3, 8])

    assert state.swaps == 0
    assert state.comparisons > 0


def test_quick_sort_handles_long_sorted_input() -> None:
    values = list(range(200))
    state, _ = drive("quick-sort", values)
    assert state.array == values


def test_radix_sort_handles_negatives_and_zero() -> None:
    values = [0, -105, 33, -7, 0, 1000, -1]
    state, _ = drive("radix-sort", values)
    assert state.array == sorted(values)


@pytest.mark.parametrize("name", algorithm_names())
def test_counts_are_deterministic(name: str) -> None:
    values = [12, 5, 31, 5, 0, 44, 17, 9, 23, 2]

    first, _ = drive(name, values)
    second, _ = drive(name, values)

    assert (first.comparisons, first.swaps, first.accesses) == (
        second.comparisons,
        second.swaps,
        second.accesses,
    )
    assert first.comparisons >= 0 and first.swaps >= 0
