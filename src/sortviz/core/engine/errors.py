from __future__ import annotations

from typing import Sequence


class SortvizError(Exception):
    """
    Base class for errors raised to callers of the engine.
    """


class ConfigurationError(SortvizError):
    """
    A run was rejected before it started. No engine state was touched.
    """


class UnknownAlgorithm(ConfigurationError):
    def __init__(self, name: str, available: Sequence[str] = ()) -> None:
        self.name = name
        self.available = tuple(available)
        hint = f" (available: {', '.join(self.available)})" if self.available else ""
        super().__init__(f"unknown algorithm: {name!r}{hint}")


class InvalidArray(ConfigurationError):
    """
    The input array is empty, too large, or holds values the algorithm cannot sort.
    """


class RunCancelled(Exception):
    """
    Raised inside a step primitive once the run has been stopped.

    Never surfaced to callers: the controller converts it into success=False.
    """
