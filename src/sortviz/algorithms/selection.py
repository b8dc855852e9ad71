from __future__ import annotations

from typing import AsyncIterator

from sortviz.algorithms.base import Compare, Complete, Highlight, Primitives, Sorted, StepDescriptor, Swap


async def selection_sort(ops: Primitives) -> AsyncIterator[StepDescriptor]:
    n = ops.size

    for i in range(n - 1):
        if ops.should_stop():
            return

        min_idx = i
        await ops.highlight([i], "min")
        yield Highlight((i,), "min")

        for j in range(i + 1, n):
            if ops.should_stop():
                return

            is_greater = await ops.compare(min_idx, j)
            yield Compare((min_idx, j))

            if is_greater:
                await ops.highlight([min_idx], "default")
                min_idx = j
                await ops.highlight([min_idx], "min")
                yield Highlight((min_idx,), "min")

        if min_idx != i:
            await ops.swap(i, min_idx)
            yield Swap((i, min_idx))
            await ops.highlight([min_idx], "default")

        await ops.mark_sorted([i])
        yield Sorted((i,))

    if n > 0:
        await ops.mark_sorted([n - 1])
        yield Sorted((n - 1,))

    yield Complete()
