from __future__ import annotations

from typing import AsyncIterator

from sortviz.algorithms.base import Compare, Complete, Highlight, Primitives, Sorted, StepDescriptor, Swap


async def shell_sort(ops: Primitives) -> AsyncIterator[StepDescriptor]:
    """
    Gapped insertion sort over the gaps n/2, n/4, ..., 1.
    """
    n = ops.size
    gap = n // 2

    while gap > 0:
        for i in range(gap, n):
            if ops.should_stop():
                return

            await ops.highlight([i], "pivot")
            yield Highlight((i,), "pivot")

            j = i
            while j >= gap:
                if ops.should_stop():
                    return

                should_swap = await ops.compare(j - gap, j)
                yield Compare((j - gap, j))

                if not should_swap:
                    break

                await ops.swap(j - gap, j)
                yield Swap((j - gap, j))
                j -= gap

            await ops.highlight([i], "default")

        gap //= 2

    for i in range(n):
        await ops.mark_sorted([i])
    yield Sorted(tuple(range(n)))

    yield Complete()
