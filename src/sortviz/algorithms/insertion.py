from __future__ import annotations

from typing import AsyncIterator

from sortviz.algorithms.base import Compare, Complete, Highlight, Primitives, Sorted, StepDescriptor, Swap


async def insertion_sort(ops: Primitives) -> AsyncIterator[StepDescriptor]:
    """
    Insertion sort where every one-slot shift is a swap.

    The swap counter therefore grows with each shift, not once per insertion.
    Displays built on these counts rely on that, so it stays.
    """
    n = ops.size
    if n == 0:
        yield Complete()
        return

    await ops.mark_sorted([0])

    for i in range(1, n):
        if ops.should_stop():
            return

        await ops.highlight([i], "pivot")
        yield Highlight((i,), "pivot")

        # The key travels left; it always sits at j + 1
        j = i - 1
        while j >= 0:
            if ops.should_stop():
                return

            should_move = await ops.compare(j, j + 1)
            yield Compare((j, j + 1))

            if not should_move:
                break

            await ops.swap(j, j + 1)
            yield Swap((j, j + 1))
            j -= 1

        await ops.mark_sorted([i])
        yield Sorted((i,))

    yield Complete()
