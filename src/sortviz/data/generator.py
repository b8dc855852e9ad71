from __future__ import annotations

import math
import random
import re
from typing import Any, Literal, Sequence

from sortviz.core.engine.errors import InvalidArray

InputPattern = Literal[
    "random",
    "sorted",
    "reversed",
    "nearly-sorted",
    "duplicates",
    "wave",
    "sawtooth",
    "pyramid",
    "visualization",
]

DEFAULT_MIN = 5
DEFAULT_MAX = 100


# =========================
# Generators
# =========================

def random_array(size: int, lo: int = DEFAULT_MIN, hi: int = DEFAULT_MAX, *, rng: random.Random) -> list[int]:
    return [rng.randint(lo, hi) for _ in range(size)]


def sorted_array(size: int, lo: int = DEFAULT_MIN, hi: int = DEFAULT_MAX) -> list[int]:
    if size == 1:
        return [lo]
    step = (hi - lo) / (size - 1)
    return [round(lo + step * i) for i in range(size)]


def reversed_array(size: int, lo: int = DEFAULT_MIN, hi: int = DEFAULT_MAX) -> list[int]:
    return sorted_array(size, lo, hi)[::-1]


def nearly_sorted(size: int, lo: int = DEFAULT_MIN, hi: int = DEFAULT_MAX, *, rng: random.Random) -> list[int]:
    """
    Sorted array with roughly 10% of positions swapped.
    """
    arr = sorted_array(size, lo, hi)
    for _ in range(size // 10):
        a, b = rng.randrange(size), rng.randrange(size)
        arr[a], arr[b] = arr[b], arr[a]
    return arr


def duplicates(
    size: int,
    unique_values: int = 10,
    lo: int = DEFAULT_MIN,
    hi: int = DEFAULT_MAX,
    *,
    rng: random.Random,
) -> list[int]:
    pool = random_array(unique_values, lo, hi, rng=rng)
    return [rng.choice(pool) for _ in range(size)]


def pattern(size: int, kind: Literal["wave", "sawtooth", "pyramid"]) -> list[int]:
    if kind == "wave":
        return [round(50 + 45 * math.sin((i / size) * math.pi * 4)) for i in range(size)]

    if kind == "sawtooth":
        teeth = math.ceil(size / 10)
        tooth = math.ceil(size / teeth)
        return [round(5 + (i % tooth) * (95 / tooth)) for i in range(size)]

    if kind == "pyramid":
        mid = max(size // 2, 1)
        return [round(5 + ((i if i <= mid else size - 1 - i) / mid) * 95) for i in range(size)]

    raise ValueError(f"unknown pattern: {kind!r}")


def for_visualization(size: int, *, rng: random.Random) -> list[int]:
    """
    Evenly spread values with a little jitter, shuffled. Bars of nearly
    distinct heights read better on screen than uniform random noise.
    """
    step = 95 / size
    values = [round(5 + step * i + (rng.random() - 0.5) * step * 0.5) for i in range(size)]
    rng.shuffle(values)
    return values


def generate(size: int, kind: InputPattern = "random", *, seed: int | None = None) -> list[int]:
    if size <= 0:
        raise InvalidArray("array size must be > 0")

    rng = random.Random(seed)

    if kind == "random":
        return random_array(size, rng=rng)
    if kind == "sorted":
        return sorted_array(size)
    if kind == "reversed":
        return reversed_array(size)
    if kind == "nearly-sorted":
        return nearly_sorted(size, rng=rng)
    if kind == "duplicates":
        return duplicates(size, rng=rng)
    if kind in ("wave", "sawtooth", "pyramid"):
        return pattern(size, kind)
    if kind == "visualization":
        return for_visualization(size, rng=rng)

    raise InvalidArray(f"unknown input pattern: {kind!r}")


# =========================
# Parsing & validation
# =========================

_SPLIT = re.compile(r"[,\s]+")


def parse_array_input(text: str) -> list[int | float]:
    """
    Parse "1,2,3", "[1, 2, 3]" or "1 2 3" into numbers.
    """
    cleaned = text.strip().strip("[]").strip()
    if not cleaned:
        raise InvalidArray("array input is empty")

    out: list[int | float] = []
    for token in _SPLIT.split(cleaned):
        if not token:
            continue
        try:
            out.append(int(token))
        except ValueError:
            try:
                out.append(float(token))
            except ValueError:
                raise InvalidArray(f"not a number: {token!r}") from None
    return out


def check_numbers(values: Sequence[Any]) -> list[int | float]:
    """
    Reject anything that is not a finite real number. bool is rejected too.
    """
    out: list[int | float] = []
    for i, v in enumerate(values):
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise InvalidArray(f"invalid value at index {i}: {v!r}")
        if isinstance(v, float) and not math.isfinite(v):
            raise InvalidArray(f"invalid value at index {i}: {v!r}")
        out.append(v)
    return out


def validate_array(
    values: Sequence[Any],
    *,
    max_size: int,
    integers_only: bool = False,
    max_range: int | None = None,
) -> list[int | float]:
    """
    Validate an input array before a run starts. Raises InvalidArray.
    """
    if len(values) == 0:
        raise InvalidArray("array cannot be empty")
    if len(values) > max_size:
        raise InvalidArray(f"array size cannot exceed {max_size} (got {len(values)})")

    numbers = check_numbers(values)

    if integers_only:
        for i, v in enumerate(numbers):
            if isinstance(v, float) and not v.is_integer():
                raise InvalidArray(f"integer values required, got {v!r} at index {i}")

        if max_range is not None:
            span = max(numbers) - min(numbers) + 1
            if span > max_range:
                raise InvalidArray(f"value range {int(span)} exceeds limit {max_range}")

    return numbers
