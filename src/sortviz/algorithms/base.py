from __future__ import annotations

from dataclasses import dataclass
from typing import AsyncIterator, Callable, ClassVar, Literal, Protocol, Sequence

Number = int | float
HighlightTag = Literal["pivot", "min", "max", "comparing", "default"]


# =========================
# Step descriptors
# =========================

@dataclass(frozen=True, slots=True)
class StepDescriptor:
    """
    One observable event of a sort. Produced for observers only;
    nothing is required to act on it.
    """

    kind: ClassVar[str] = "step"

    indices: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class Compare(StepDescriptor):
    kind: ClassVar[str] = "compare"


@dataclass(frozen=True, slots=True)
class Swap(StepDescriptor):
    kind: ClassVar[str] = "swap"


@dataclass(frozen=True, slots=True)
class SetValue(StepDescriptor):
    kind: ClassVar[str] = "set"

    value: Number


@dataclass(frozen=True, slots=True)
class Highlight(StepDescriptor):
    kind: ClassVar[str] = "highlight"

    tag: HighlightTag


@dataclass(frozen=True, slots=True)
class Sorted(StepDescriptor):
    kind: ClassVar[str] = "sorted"


@dataclass(frozen=True, slots=True)
class Complete(StepDescriptor):
    kind: ClassVar[str] = "complete"

    indices: tuple[int, ...] = ()


# =========================
# Primitive interface
# =========================

class Primitives(Protocol):
    """
    Synchronization points a sequence calls for every array mutation.

    compare/swap/set/highlight/mark_sorted may suspend (delay, pause, step
    mode) and raise RunCancelled once the run is stopped. peek and size are
    plain reads of the shared array.
    """

    @property
    def size(self) -> int:
        ...

    def peek(self, index: int) -> Number:
        ...

    def should_stop(self) -> bool:
        ...

    async def compare(self, i: int, j: int, *, operands: tuple[Number, Number] | None = None) -> bool:
        """
        True when element i is greater than element j. `operands` replaces
        the two array reads for algorithms comparing buffered values.
        """
        ...

    async def swap(self, i: int, j: int) -> None:
        ...

    async def set(self, index: int, value: Number) -> None:
        ...

    async def highlight(self, indices: Sequence[int], tag: HighlightTag) -> None:
        ...

    async def mark_sorted(self, indices: Sequence[int]) -> None:
        ...


SortSequence = Callable[[Primitives], AsyncIterator[StepDescriptor]]
