from __future__ import annotations

from fastapi import APIRouter

from songshelf.models import Song
from songshelf.search.itunes import ItunesSearchClient


def build_router(client: ItunesSearchClient) -> APIRouter:
    router = APIRouter()

    def _search(q: str = "") -> list[Song]:
        return client.search_songs(q)

    router.add_api_route("/v1/search", _search, methods=["GET"])
    return router


__all__ = ["build_router"]
