from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from sortviz.core.events.base import Event


@dataclass(frozen=True, slots=True)
class RunStarted(Event):
    """
    Emitted when a run begins driving its sequence.
    """

    event_type: ClassVar[str] = "engine.run_started"

    run_id: str
    algorithm: str
    size: int
    speed: int
    mode: str


@dataclass(frozen=True, slots=True)
class StepObserved(Event):
    """
    Emitted after the controller consumes one step descriptor.
    """

    event_type: ClassVar[str] = "engine.step"

    run_id: str
    kind: str
    indices: tuple[int, ...]
    current_step: int
    comparisons: int
    swaps: int
    progress: float


@dataclass(frozen=True, slots=True)
class RunPaused(Event):
    event_type: ClassVar[str] = "engine.run_paused"

    run_id: str


@dataclass(frozen=True, slots=True)
class RunResumed(Event):
    event_type: ClassVar[str] = "engine.run_resumed"

    run_id: str


@dataclass(frozen=True, slots=True)
class RunCompleted(Event):
    """
    Emitted when a sequence runs to natural completion.
    """

    event_type: ClassVar[str] = "engine.run_completed"

    run_id: str
    comparisons: int
    swaps: int
    accesses: int
    total_time: float


@dataclass(frozen=True, slots=True)
class RunStopped(Event):
    """
    Emitted when a run is cancelled before completion.
    """

    event_type: ClassVar[str] = "engine.run_stopped"

    run_id: str


@dataclass(frozen=True, slots=True)
class EngineError(Event):
    """
    Emitted when a sequence fails with an unexpected exception.
    """

    event_type: ClassVar[str] = "engine.error"

    run_id: str

    error_type: str
    error_message: str
