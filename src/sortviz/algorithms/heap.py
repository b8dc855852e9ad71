from __future__ import annotations

from typing import AsyncIterator

from sortviz.algorithms.base import Compare, Complete, Primitives, Sorted, StepDescriptor, Swap


async def heap_sort(ops: Primitives) -> AsyncIterator[StepDescriptor]:
    n = ops.size

    # Build a max-heap, sifting down from the last parent to the root
    for root in range(n // 2 - 1, -1, -1):
        if ops.should_stop():
            return
        async for step in _sift_down(ops, n, root):
            yield step

    # Move the max behind the heap boundary, then repair the smaller heap
    for end in range(n - 1, 0, -1):
        if ops.should_stop():
            return

        await ops.swap(0, end)
        yield Swap((0, end))

        await ops.mark_sorted([end])
        yield Sorted((end,))

        async for step in _sift_down(ops, end, 0):
            yield step

    if n > 0:
        await ops.mark_sorted([0])
        yield Sorted((0,))

    yield Complete()


async def _sift_down(ops: Primitives, heap_size: int, root: int) -> AsyncIterator[StepDescriptor]:
    while True:
        if ops.should_stop():
            return

        largest = root
        left = 2 * root + 1
        right = left + 1

        if left < heap_size:
            bigger = await ops.compare(left, largest)
            yield Compare((largest, left))
            if bigger:
                largest = left

        if right < heap_size:
            bigger = await ops.compare(right, largest)
            yield Compare((largest, right))
            if bigger:
                largest = right

        if largest == root:
            return

        await ops.swap(root, largest)
        yield Swap((root, largest))
        root = largest
