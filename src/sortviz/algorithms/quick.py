from __future__ import annotations

from typing import AsyncIterator

from sortviz.algorithms.base import Compare, Complete, Highlight, Primitives, Sorted, StepDescriptor, Swap


async def quick_sort(ops: Primitives) -> AsyncIterator[StepDescriptor]:
    """
    Quick sort with Lomuto partitioning around the last element.

    Sub-ranges are kept on an explicit stack, left range popped first, which
    emits steps in the same order as the recursive formulation while keeping
    already-sorted inputs from nesting one generator per element.
    """
    n = ops.size
    pending: list[tuple[int, int]] = [(0, n - 1)]

    while pending:
        if ops.should_stop():
            return

        low, high = pending.pop()
        if low >= high:
            continue

        last: StepDescriptor | None = None
        async for step in _partition(ops, low, high):
            last = step
            yield step

        # A partition that finished ends with the pivot's Sorted step
        if not isinstance(last, Sorted):
            return
        pivot_idx = last.indices[0]

        pending.append((pivot_idx + 1, high))
        pending.append((low, pivot_idx - 1))

    for i in range(n):
        await ops.mark_sorted([i])
    yield Sorted(tuple(range(n)))

    yield Complete()


async def _partition(ops: Primitives, low: int, high: int) -> AsyncIterator[StepDescriptor]:
    await ops.highlight([high], "pivot")
    yield Highlight((high,), "pivot")

    i = low - 1

    for j in range(low, high):
        if ops.should_stop():
            return

        # pivot > a[j]  <=>  a[j] belongs left of the pivot
        below = await ops.compare(high, j)
        yield Compare((j, high))
        await ops.highlight([high], "pivot")

        if below:
            i += 1
            if i != j:
                await ops.swap(i, j)
                yield Swap((i, j))

    pivot_idx = i + 1
    if pivot_idx != high:
        await ops.swap(pivot_idx, high)
        yield Swap((pivot_idx, high))

    await ops.highlight([high], "default")
    await ops.mark_sorted([pivot_idx])
    yield Sorted((pivot_idx,))
