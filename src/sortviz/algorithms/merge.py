from __future__ import annotations

from typing import AsyncIterator

from sortviz.algorithms.base import Compare, Complete, Highlight, Primitives, SetValue, Sorted, StepDescriptor


async def merge_sort(ops: Primitives) -> AsyncIterator[StepDescriptor]:
    """
    Top-down merge sort. Merges write through set(); nothing is swapped.
    """
    n = ops.size

    async for step in _sort_range(ops, 0, n - 1):
        yield step

    if ops.should_stop():
        return

    for i in range(n):
        await ops.mark_sorted([i])
    yield Sorted(tuple(range(n)))

    yield Complete()


async def _sort_range(ops: Primitives, start: int, end: int) -> AsyncIterator[StepDescriptor]:
    if start >= end or ops.should_stop():
        return

    mid = (start + end) // 2

    async for step in _sort_range(ops, start, mid):
        yield step
    if ops.should_stop():
        return

    async for step in _sort_range(ops, mid + 1, end):
        yield step
    if ops.should_stop():
        return

    async for step in _merge(ops, start, mid, end):
        yield step


async def _merge(ops: Primitives, start: int, mid: int, end: int) -> AsyncIterator[StepDescriptor]:
    left = [ops.peek(k) for k in range(start, mid + 1)]
    right = [ops.peek(k) for k in range(mid + 1, end + 1)]
    span = tuple(range(start, end + 1))

    await ops.highlight(span, "comparing")
    yield Highlight(span, "comparing")

    i = j = 0
    k = start

    while i < len(left) and j < len(right):
        if ops.should_stop():
            return

        # Slots of the left run get overwritten while merging, so the heads
        # are compared from the buffers. Ties take from the left (stable).
        head_left, head_right = start + i, mid + 1 + j
        take_right = await ops.compare(head_left, head_right, operands=(left[i], right[j]))
        yield Compare((head_left, head_right))

        if take_right:
            value = right[j]
            j += 1
        else:
            value = left[i]
            i += 1

        await ops.set(k, value)
        yield SetValue((k,), value)
        k += 1

    for value in (*left[i:], *right[j:]):
        if ops.should_stop():
            return
        await ops.set(k, value)
        yield SetValue((k,), value)
        k += 1

    await ops.highlight(span, "default")
