from __future__ import annotations

from typing import AsyncIterator

from sortviz.algorithms.base import Complete, Highlight, Primitives, SetValue, StepDescriptor


async def counting_sort(ops: Primitives) -> AsyncIterator[StepDescriptor]:
    """
    Stable counting sort for integer values.

    The count table spans min..max, so callers bound the value range before
    starting a run (see validate_array).
    """
    n = ops.size
    if n == 0:
        yield Complete()
        return

    values = [ops.peek(i) for i in range(n)]
    low = min(values)
    count = [0] * (int(max(values) - low) + 1)

    for i, value in enumerate(values):
        if ops.should_stop():
            return
        count[int(value - low)] += 1

        await ops.highlight([i], "comparing")
        yield Highlight((i,), "comparing")
        await ops.highlight([i], "default")

    for k in range(1, len(count)):
        count[k] += count[k - 1]

    output = [low] * n
    for i in range(n - 1, -1, -1):
        if ops.should_stop():
            return

        value = values[i]
        slot = int(value - low)
        count[slot] -= 1
        output[count[slot]] = value

        await ops.highlight([i], "comparing")
        yield Highlight((i,), "comparing")
        await ops.highlight([i], "default")

    for i, value in enumerate(output):
        if ops.should_stop():
            return
        await ops.set(i, value)
        await ops.mark_sorted([i])
        yield SetValue((i,), value)

    yield Complete()
