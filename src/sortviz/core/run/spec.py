from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sortviz.core.engine.state import RunMode
from sortviz.core.engine.timing import clamp_speed
from sortviz.data.generator import InputPattern, check_numbers


class ExecutionConfig(BaseModel):
    """
    Configuration of one run. Frozen: it cannot change while the run is live
    (speed changes go through SortController.set_speed).

    input_array=None means "generate": input_size/input_pattern/seed pick the data.
    """

    model_config = ConfigDict(frozen=True)

    speed: int = Field(default=5, description="1 (slowest) .. 10 (fastest); clamped")
    mode: RunMode = Field(default="continuous")

    input_array: Optional[list[int | float]] = Field(default=None, description="Caller-supplied values")

    input_size: Optional[int] = Field(default=None, gt=0, description="Size of generated input")
    input_pattern: InputPattern = Field(default="random")
    seed: Optional[int] = Field(default=None, description="Seed for generated input")

    @field_validator("speed", mode="before")
    @classmethod
    def _clamp_speed(cls, v: Any) -> int:
        return clamp_speed(v)

    @field_validator("input_array", mode="before")
    @classmethod
    def _numbers_only(cls, v: Any) -> Any:
        # InvalidArray is not a ValueError: pydantic lets it through untouched
        if v is None:
            return v
        return check_numbers(list(v))
