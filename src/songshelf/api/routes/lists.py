from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Request
from typing_extensions import TypedDict

from songshelf.api._decoders import decode_list_body, decode_song_body, load_json_object
from songshelf.errors import AppError, ErrorCode
from songshelf.lists import ListService
from songshelf.models import Song, SongList


class DeletedResponse(TypedDict):
    status: Literal["deleted"]


class AddedSongResponse(TypedDict):
    id: str


def build_router(service: ListService) -> APIRouter:
    """Build the list and song routes under /v1/users/{user_id}/lists."""
    router = APIRouter()
    base = "/v1/users/{user_id}/lists"

    def _get_lists(user_id: str) -> list[SongList]:
        return service.get_lists(user_id)

    async def _create_list(user_id: str, request: Request) -> SongList:
        body = decode_list_body(load_json_object(await request.body()), name_required=True)
        return service.create_list(user_id, body["name"], body["description"])

    def _get_by_slug(user_id: str, slug: str) -> SongList:
        lst = service.get_list_by_slug(user_id, slug)
        if lst is None:
            raise AppError(code=ErrorCode.LIST_NOT_FOUND, message=f"no list with slug {slug}")
        return lst

    async def _update_list(user_id: str, list_id: str, request: Request) -> SongList:
        body = decode_list_body(load_json_object(await request.body()), name_required=False)
        return service.update_list(user_id, list_id, body["name"], body["description"])

    def _delete_list(user_id: str, list_id: str) -> DeletedResponse:
        service.delete_list(user_id, list_id)
        return {"status": "deleted"}

    def _get_songs(user_id: str, list_id: str) -> list[Song]:
        return service.get_songs(user_id, list_id)

    async def _add_song(user_id: str, list_id: str, request: Request) -> AddedSongResponse:
        song = decode_song_body(load_json_object(await request.body()))
        return {"id": service.add_song(user_id, list_id, song)}

    def _delete_song(user_id: str, list_id: str, song_id: str) -> DeletedResponse:
        service.delete_song(user_id, list_id, song_id)
        return {"status": "deleted"}

    router.add_api_route(base, _get_lists, methods=["GET"])
    router.add_api_route(base, _create_list, methods=["POST"])
    router.add_api_route(base + "/by-slug/{slug}", _get_by_slug, methods=["GET"])
    router.add_api_route(base + "/{list_id}", _update_list, methods=["PUT"])
    router.add_api_route(base + "/{list_id}", _delete_list, methods=["DELETE"])
    router.add_api_route(base + "/{list_id}/songs", _get_songs, methods=["GET"])
    router.add_api_route(base + "/{list_id}/songs", _add_song, methods=["POST"])
    router.add_api_route(base + "/{list_id}/songs/{song_id}", _delete_song, methods=["DELETE"])
    return router


__all__ = ["AddedSongResponse", "DeletedResponse", "build_router"]
