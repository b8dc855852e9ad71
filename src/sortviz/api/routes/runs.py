from __future__ import annotations

import asyncio
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field, ValidationError

from sortviz.api.deps import get_controller
from sortviz.core.engine.engine import SortController
from sortviz.core.engine.errors import InvalidArray, UnknownAlgorithm
from sortviz.core.engine.state import Phase, RunMode
from sortviz.core.run.spec import ExecutionConfig
from sortviz.data.generator import InputPattern, parse_array_input
from sortviz.rendering.sink import RecordingSink

router = APIRouter(tags=["runs"])


# =========================
# Schemas
# =========================

class StartRunRequest(BaseModel):
    algorithm: str
    speed: Optional[int] = Field(default=None, description="1..10, clamped")
    mode: Optional[RunMode] = None
    input_array: Optional[list[Any] | str] = Field(
        default=None,
        description="Values to sort, as a list or text like \"5, 2, 8\"; omit to generate",
    )
    input_size: Optional[int] = Field(default=None, gt=0)
    input_pattern: InputPattern = "random"
    seed: Optional[int] = None


class StartRunResponse(BaseModel):
    run_id: str
    algorithm: str
    size: int


class ControlResponse(BaseModel):
    run_id: str
    phase: Phase


class SpeedRequest(BaseModel):
    speed: int


class SpeedResponse(BaseModel):
    speed: int


class RunStateResponse(BaseModel):
    run_id: str
    algorithm: str
    phase: Phase
    speed: int
    mode: RunMode
    array: list[int | float]
    comparisons: int
    swaps: int
    accesses: int
    elapsed_time: float
    current_step: int
    total_steps_observed: int
    progress: float
    awaiting_step: bool
    metrics: dict[str, str]
    last_result: Optional[dict[str, Any]] = None


class FramesResponse(BaseModel):
    last_seq: int
    frames: list[dict[str, Any]]


# =========================
# Helpers
# =========================

def _control_response(controller: SortController) -> ControlResponse:
    snap = controller.get_state()
    return ControlResponse(run_id=snap.run_id, phase=snap.phase)


# =========================
# Routes
# =========================

@router.post("/runs", response_model=StartRunResponse, status_code=202)
async def start_run(
    payload: StartRunRequest,
    request: Request,
    controller: SortController = Depends(get_controller),
) -> StartRunResponse:
    settings = controller.settings

    try:
        values = payload.input_array
        if isinstance(values, str):
            values = parse_array_input(values)

        config = ExecutionConfig(
            speed=payload.speed if payload.speed is not None else settings.default_speed,
            mode=payload.mode if payload.mode is not None else settings.default_mode,
            input_array=values,
            input_size=payload.input_size,
            input_pattern=payload.input_pattern,
            seed=payload.seed,
        )
        prepared = controller.prepare(payload.algorithm, config)
    except UnknownAlgorithm as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (InvalidArray, ValidationError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    # Keep a reference: the loop only holds weak references to tasks
    request.app.state.run_task = asyncio.create_task(controller.run_prepared(prepared))

    return StartRunResponse(run_id=prepared.run_id, algorithm=prepared.entry.name, size=len(prepared.values))


@router.get("/runs/current", response_model=RunStateResponse)
async def get_current_run(controller: SortController = Depends(get_controller)) -> RunStateResponse:
    snap = controller.get_state()
    last = controller.last_result

    return RunStateResponse(
        run_id=snap.run_id,
        algorithm=snap.algorithm_name,
        phase=snap.phase,
        speed=snap.speed,
        mode=snap.mode,
        array=list(snap.array),
        comparisons=snap.comparisons,
        swaps=snap.swaps,
        accesses=snap.accesses,
        elapsed_time=snap.elapsed_time,
        current_step=snap.current_step,
        total_steps_observed=snap.total_steps_observed,
        progress=snap.progress,
        awaiting_step=controller.awaiting_step,
        metrics=controller.monitor.summary(),
        last_result=last.to_dict() if last is not None and last.run_id == snap.run_id else None,
    )


@router.post("/runs/current/pause", response_model=ControlResponse)
async def pause_run(controller: SortController = Depends(get_controller)) -> ControlResponse:
    controller.pause()
    return _control_response(controller)


@router.post("/runs/current/resume", response_model=ControlResponse)
async def resume_run(controller: SortController = Depends(get_controller)) -> ControlResponse:
    controller.resume()
    return _control_response(controller)


@router.post("/runs/current/stop", response_model=ControlResponse)
async def stop_run(controller: SortController = Depends(get_controller)) -> ControlResponse:
    controller.stop()
    return _control_response(controller)


@router.post("/runs/current/step", response_model=ControlResponse)
async def step_run(controller: SortController = Depends(get_controller)) -> ControlResponse:
    controller.step()
    return _control_response(controller)


@router.put("/runs/current/speed", response_model=SpeedResponse)
async def set_speed(payload: SpeedRequest, controller: SortController = Depends(get_controller)) -> SpeedResponse:
    controller.set_speed(payload.speed)
    return SpeedResponse(speed=controller.speed)


@router.get("/runs/current/frames", response_model=FramesResponse)
async def get_frames(since: int = 0, controller: SortController = Depends(get_controller)) -> FramesResponse:
    sink = controller.sink
    if not isinstance(sink, RecordingSink):
        raise HTTPException(status_code=404, detail="frame recording is not enabled")

    frames = [
        {k: v for k, v in (
            ("seq", f.seq),
            ("op", f.op),
            ("index", f.index),
            ("other", f.other),
            ("value", f.value),
            ("tag", f.tag),
            ("values", list(f.values) if f.values is not None else None),
        ) if v is not None}
        for f in sink.frames_since(since)
    ]
    return FramesResponse(last_seq=sink.last_seq, frames=frames)
