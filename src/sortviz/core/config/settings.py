from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """
    Process-level configuration for the sorting engine and its HTTP surface.

    This class is the single source of truth for:
    - environment selection
    - logging behavior
    - run defaults (speed, mode, generated input)
    - input validation limits
    - timing knobs of the step primitives
    """

    model_config = SettingsConfigDict(
        env_prefix="SORTVIZ_",
        env_file=".env",
        extra="ignore",
    )

    # ---- Environment -------------------------------------------------

    env: Literal["local", "staging", "prod"] = "local"

    # ---- Logging -----------------------------------------------------

    log_level: str = "INFO"
    log_json: bool = Field(default=True, description="JSON lines when true, plain console output otherwise")

    # ---- Run defaults ------------------------------------------------

    default_speed: int = Field(default=5, ge=1, le=10, description="Speed used when a run does not set one")
    default_mode: Literal["step", "continuous"] = "continuous"

    default_input_size: int = Field(default=50, gt=0, description="Size of generated input arrays")
    default_seed: int = Field(default=42, description="Default RNG seed for generated input")

    # ---- Validation limits -------------------------------------------

    max_array_size: int = Field(
        default=2000,
        gt=0,
        description="Largest accepted input array; interactive displays usually want 500 or less",
    )
    max_counting_range: int = Field(
        default=1_000_000,
        gt=0,
        description="Largest value range counting sort may allocate a table for",
    )

    # ---- Timing ------------------------------------------------------

    pause_poll_interval: float = Field(
        default=0.1,
        gt=0,
        description="Seconds between pause checks; also the longest uninterruptible sleep",
    )
    delay_scale: float = Field(
        default=1.0,
        ge=0,
        description="Multiplier applied to every primitive delay (0 disables delays)",
    )


# Process default settings object
settings = EngineSettings()
