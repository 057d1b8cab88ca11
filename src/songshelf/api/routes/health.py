from __future__ import annotations

from typing import Literal

from fastapi import APIRouter
from typing_extensions import TypedDict


class HealthResponse(TypedDict):
    status: Literal["ok"]


def build_router() -> APIRouter:
    """Build health router with the /healthz liveness probe."""
    router = APIRouter()

    def _healthz() -> HealthResponse:
        return {"status": "ok"}

    router.add_api_route("/healthz", _healthz, methods=["GET"])
    return router


__all__ = ["HealthResponse", "build_router"]
