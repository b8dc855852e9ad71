from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from sortviz.algorithms.registry import ALGORITHMS, is_sorting_algorithm

router = APIRouter(tags=["algorithms"])


class AlgorithmsResponse(BaseModel):
    algorithms: list[dict[str, Any]]


@router.get("/algorithms", response_model=AlgorithmsResponse)
def list_algorithms() -> AlgorithmsResponse:
    return AlgorithmsResponse(algorithms=[e.info.to_dict() for e in ALGORITHMS.values()])


@router.get("/algorithms/{name}")
def get_algorithm_info(name: str) -> dict[str, Any]:
    if not is_sorting_algorithm(name):
        raise HTTPException(status_code=404, detail=f"unknown algorithm: {name}")
    return ALGORITHMS[name].info.to_dict()
