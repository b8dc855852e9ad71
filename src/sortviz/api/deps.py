from __future__ import annotations

from fastapi import Request

from sortviz.core.engine.engine import SortController


def get_controller(request: Request) -> SortController:
    """
    The controller is created by the app factory and lives on app.state.
    """
    return request.app.state.controller
