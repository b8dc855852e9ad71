from __future__ import annotations

from typing import AsyncIterator

from sortviz.algorithms.base import Complete, Highlight, Number, Primitives, SetValue, Sorted, StepDescriptor

BASE = 10


async def radix_sort(ops: Primitives) -> AsyncIterator[StepDescriptor]:
    """
    LSD radix sort in base 10 for integer values.

    Negative inputs are sorted on their distance from the minimum, which
    leaves the digit passes identical for non-negative inputs.
    """
    n = ops.size
    if n == 0:
        yield Complete()
        return

    values = [ops.peek(i) for i in range(n)]
    offset = min(0, min(values))
    largest = int(max(values) - offset)

    exp = 1
    while largest // exp > 0:
        if ops.should_stop():
            return
        async for step in _digit_pass(ops, exp, offset):
            yield step
        exp *= BASE

    if ops.should_stop():
        return

    for i in range(n):
        await ops.mark_sorted([i])
    yield Sorted(tuple(range(n)))

    yield Complete()


def _digit(value: Number, exp: int, offset: Number) -> int:
    return (int(value - offset) // exp) % BASE


async def _digit_pass(ops: Primitives, exp: int, offset: Number) -> AsyncIterator[StepDescriptor]:
    n = ops.size
    values = [ops.peek(i) for i in range(n)]
    count = [0] * BASE

    for i, value in enumerate(values):
        if ops.should_stop():
            return
        count[_digit(value, exp, offset)] += 1

        await ops.highlight([i], "comparing")
        yield Highlight((i,), "comparing")
        await ops.highlight([i], "default")

    for d in range(1, BASE):
        count[d] += count[d - 1]

    output = list(values)
    for value in reversed(values):
        d = _digit(value, exp, offset)
        count[d] -= 1
        output[count[d]] = value

    for i, value in enumerate(output):
        if ops.should_stop():
            return
        await ops.set(i, value)
        yield SetValue((i,), value)
