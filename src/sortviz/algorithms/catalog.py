from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable


def _quadratic(factor: float) -> Callable[[int], int]:
    return lambda n: max(1, int(factor * n * n))


def _linearithmic(factor: float) -> Callable[[int], int]:
    return lambda n: max(1, int(factor * n * math.log2(max(n, 2))))


def _linear(factor: float) -> Callable[[int], int]:
    return lambda n: max(1, int(factor * n))


@dataclass(frozen=True, slots=True)
class AlgorithmInfo:
    """
    Display metadata for one sorting algorithm.

    estimate_steps(n) approximates how many counted primitives
    (compare/swap/set) a run over n elements performs; it only drives the
    coarse progress figure.
    """

    id: str
    name: str
    description: str
    time_best: str
    time_average: str
    time_worst: str
    space: str
    stable: bool
    in_place: bool
    adaptive: bool
    estimate_steps: Callable[[int], int]
    integers_only: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "time_complexity": {
                "best": self.time_best,
                "average": self.time_average,
                "worst": self.time_worst,
            },
            "space_complexity": self.space,
            "stable": self.stable,
            "in_place": self.in_place,
            "adaptive": self.adaptive,
            "integers_only": self.integers_only,
        }


CATALOG: dict[str, AlgorithmInfo] = {
    info.id: info
    for info in (
        AlgorithmInfo(
            id="bubble-sort",
            name="Bubble Sort",
            description=(
                "Repeatedly steps through the list, compares adjacent elements "
                "and swaps them if they are in the wrong order."
            ),
            time_best="O(n)",
            time_average="O(n²)",
            time_worst="O(n²)",
            space="O(1)",
            stable=True,
            in_place=True,
            adaptive=True,
            estimate_steps=_quadratic(0.75),
        ),
        AlgorithmInfo(
            id="selection-sort",
            name="Selection Sort",
            description=(
                "Splits the input into sorted and unsorted regions and repeatedly "
                "moves the smallest unsorted element to the end of the sorted one."
            ),
            time_best="O(n²)",
            time_average="O(n²)",
            time_worst="O(n²)",
            space="O(1)",
            stable=False,
            in_place=True,
            adaptive=False,
            estimate_steps=_quadratic(0.5),
        ),
        AlgorithmInfo(
            id="insertion-sort",
            name="Insertion Sort",
            description="Builds the sorted array one item at a time by inserting each element into place.",
            time_best="O(n)",
            time_average="O(n²)",
            time_worst="O(n²)",
            space="O(1)",
            stable=True,
            in_place=True,
            adaptive=True,
            estimate_steps=_quadratic(0.5),
        ),
        AlgorithmInfo(
            id="merge-sort",
            name="Merge Sort",
            description="Divides the array in halves, sorts each half and merges them back.",
            time_best="O(n log n)",
            time_average="O(n log n)",
            time_worst="O(n log n)",
            space="O(n)",
            stable=True,
            in_place=False,
            adaptive=False,
            estimate_steps=_linearithmic(2.0),
        ),
        AlgorithmInfo(
            id="quick-sort",
            name="Quick Sort",
            description="Partitions around a pivot, then sorts both sides.",
            time_best="O(n log n)",
            time_average="O(n log n)",
            time_worst="O(n²)",
            space="O(log n)",
            stable=False,
            in_place=True,
            adaptive=False,
            estimate_steps=_linearithmic(2.0),
        ),
        AlgorithmInfo(
            id="heap-sort",
            name="Heap Sort",
            description="Builds a binary max-heap and repeatedly moves its root behind the heap.",
            time_best="O(n log n)",
            time_average="O(n log n)",
            time_worst="O(n log n)",
            space="O(1)",
            stable=False,
            in_place=True,
            adaptive=False,
            estimate_steps=_linearithmic(3.0),
        ),
        AlgorithmInfo(
            id="counting-sort",
            name="Counting Sort",
            description="Counts occurrences of each value and writes them back in order.",
            time_best="O(n + k)",
            time_average="O(n + k)",
            time_worst="O(n + k)",
            space="O(k)",
            stable=True,
            in_place=False,
            adaptive=False,
            estimate_steps=_linear(1.0),
            integers_only=True,
        ),
        AlgorithmInfo(
            id="radix-sort",
            name="Radix Sort",
            description="Sorts by each decimal digit, least significant first, with a stable counting pass.",
            time_best="O(d(n + k))",
            time_average="O(d(n + k))",
            time_worst="O(d(n + k))",
            space="O(n + k)",
            stable=True,
            in_place=False,
            adaptive=False,
            estimate_steps=_linear(3.0),
            integers_only=True,
        ),
        AlgorithmInfo(
            id="shell-sort",
            name="Shell Sort",
            description="Insertion sort over shrinking gaps n/2, n/4, ..., 1.",
            time_best="O(n log n)",
            time_average="O(n^1.25)",
            time_worst="O(n²)",
            space="O(1)",
            stable=False,
            in_place=True,
            adaptive=True,
            estimate_steps=_linearithmic(2.0),
        ),
    )
}
