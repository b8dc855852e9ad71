from __future__ import annotations

from typing import AsyncIterator

from sortviz.algorithms.base import Compare, Complete, Primitives, Sorted, StepDescriptor, Swap


async def bubble_sort(ops: Primitives) -> AsyncIterator[StepDescriptor]:
    """
    Adjacent-exchange passes. A pass without swaps ends the sort early.
    """
    n = ops.size

    for i in range(n - 1):
        swapped = False

        for j in range(n - i - 1):
            if ops.should_stop():
                return

            should_swap = await ops.compare(j, j + 1)
            yield Compare((j, j + 1))

            if should_swap:
                await ops.swap(j, j + 1)
                swapped = True
                yield Swap((j, j + 1))

        # Largest remaining element has bubbled to the end
        await ops.mark_sorted([n - i - 1])
        yield Sorted((n - i - 1,))

        if not swapped:
            rest = tuple(range(n - i - 1))
            for k in rest:
                await ops.mark_sorted([k])
            yield Sorted(rest)
            break

    if n > 0:
        await ops.mark_sorted([0])

    yield Complete()
