from __future__ import annotations

from fastapi import APIRouter

from songshelf.analytics.stats import StatsAggregator
from songshelf.models import AggregatedStats


def build_router(aggregator: StatsAggregator) -> APIRouter:
    router = APIRouter()

    def _get_stats(user_id: str) -> AggregatedStats:
        return aggregator.compute_stats(user_id)

    router.add_api_route("/v1/users/{user_id}/stats", _get_stats, methods=["GET"])
    return router


__all__ = ["build_router"]
