from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from sortviz.api.deps import get_controller
from sortviz.core.engine.engine import SortController

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """
    Minimal health check response. Side-effect free.
    """

    status: str
    environment: str
    engine_phase: str


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
def health(controller: SortController = Depends(get_controller)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        environment=controller.settings.env,
        engine_phase=controller.get_state().phase,
    )
