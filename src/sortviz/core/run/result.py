from __future__ import annotations

from dataclasses import dataclass

from sortviz.algorithms.base import Number


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """
    Outcome of one run.

    success is False when the run was stopped before natural completion
    or an unexpected fault occurred; error is only set for the latter.
    """

    run_id: str
    algorithm_name: str
    success: bool
    final_array: tuple[Number, ...]
    total_comparisons: int
    total_swaps: int
    total_accesses: int
    total_time: float
    total_steps: int
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "run_id": self.run_id,
            "algorithm_name": self.algorithm_name,
            "success": self.success,
            "final_array": list(self.final_array),
            "total_comparisons": self.total_comparisons,
            "total_swaps": self.total_swaps,
            "total_accesses": self.total_accesses,
            "total_time": self.total_time,
            "total_steps": self.total_steps,
            "error": self.error,
        }
