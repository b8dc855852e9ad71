from __future__ import annotations

from dataclasses import dataclass

from sortviz.algorithms.base import SortSequence
from sortviz.algorithms.bubble import bubble_sort
from sortviz.algorithms.catalog import CATALOG, AlgorithmInfo
from sortviz.algorithms.counting import counting_sort
from sortviz.algorithms.heap import heap_sort
from sortviz.algorithms.insertion import insertion_sort
from sortviz.algorithms.merge import merge_sort
from sortviz.algorithms.quick import quick_sort
from sortviz.algorithms.radix import radix_sort
from sortviz.algorithms.selection import selection_sort
from sortviz.algorithms.shell import shell_sort
from sortviz.core.engine.errors import UnknownAlgorithm


@dataclass(frozen=True, slots=True)
class AlgorithmEntry:
    info: AlgorithmInfo
    sequence: SortSequence

    @property
    def name(self) -> str:
        return self.info.id


_SEQUENCES: dict[str, SortSequence] = {
    "bubble-sort": bubble_sort,
    "selection-sort": selection_sort,
    "insertion-sort": insertion_sort,
    "merge-sort": merge_sort,
    "quick-sort": quick_sort,
    "heap-sort": heap_sort,
    "counting-sort": counting_sort,
    "radix-sort": radix_sort,
    "shell-sort": shell_sort,
}

ALGORITHMS: dict[str, AlgorithmEntry] = {
    name: AlgorithmEntry(info=CATALOG[name], sequence=seq) for name, seq in _SEQUENCES.items()
}


def algorithm_names() -> list[str]:
    return list(ALGORITHMS)


def get_algorithm(name: str) -> AlgorithmEntry:
    entry = ALGORITHMS.get(name)
    if entry is None:
        raise UnknownAlgorithm(name, available=algorithm_names())
    return entry


def is_sorting_algorithm(name: str) -> bool:
    return name in ALGORITHMS
