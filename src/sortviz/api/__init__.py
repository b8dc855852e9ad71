from __future__ import annotations

from fastapi import APIRouter

from sortviz.api.routes.algorithms import router as algorithms_router
from sortviz.api.routes.health import router as health_router
from sortviz.api.routes.runs import router as runs_router

# Top-level API router
router = APIRouter()

# Route composition
router.include_router(health_router)
router.include_router(algorithms_router)
router.include_router(runs_router)
