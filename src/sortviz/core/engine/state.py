from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from sortviz.algorithms.base import Number

RunMode = Literal["step", "continuous"]
Phase = Literal["idle", "running", "paused", "completed", "stopped"]


@dataclass(frozen=True, slots=True)
class EngineSnapshot:
    """
    Point-in-time, read-only copy of EngineState handed to observers and callers.
    """

    run_id: str
    algorithm_name: str
    phase: Phase
    running: bool
    paused: bool
    stopped: bool
    array: tuple[Number, ...]
    speed: int
    mode: RunMode
    comparisons: int
    swaps: int
    accesses: int
    elapsed_time: float
    current_step: int
    total_steps_observed: int
    progress: float


@dataclass(slots=True)
class EngineState:
    """
    Mutable state of a single run. A fresh instance is created on every run.

    - array is the working list; step primitives mutate it in place
    - stopped is terminal and overrides running/paused
    - sequence orders the events published for this run

    Guardrails:
      - next_sequence is only valid once a run has been assigned an id
    """

    run_id: str = ""
    algorithm_name: str = ""
    array: list[Number] = field(default_factory=list)
    speed: int = 5
    mode: RunMode = "continuous"

    running: bool = False
    paused: bool = False
    stopped: bool = False
    completed: bool = False

    comparisons: int = 0
    swaps: int = 0
    accesses: int = 0

    elapsed_time: float = 0.0
    current_step: int = 0
    total_steps_observed: int = 0
    progress: float = 0.0

    sequence: int = 0

    @property
    def phase(self) -> Phase:
        if self.stopped:
            return "stopped"
        if self.completed:
            return "completed"
        if self.running:
            return "paused" if self.paused else "running"
        return "idle"

    def next_sequence(self) -> int:
        if not self.run_id:
            raise RuntimeError("cannot advance sequence before a run is assigned")
        self.sequence += 1
        return self.sequence

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            run_id=self.run_id,
            algorithm_name=self.algorithm_name,
            phase=self.phase,
            running=self.running,
            paused=self.paused,
            stopped=self.stopped,
            array=tuple(self.array),
            speed=self.speed,
            mode=self.mode,
            comparisons=self.comparisons,
            swaps=self.swaps,
            accesses=self.accesses,
            elapsed_time=self.elapsed_time,
            current_step=self.current_step,
            total_steps_observed=self.total_steps_observed,
            progress=self.progress,
        )
