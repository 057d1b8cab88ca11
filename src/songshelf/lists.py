from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import UTC, datetime

from songshelf.errors import AppError, ErrorCode
from songshelf.logging import get_logger
from songshelf.models import Song, SongList
from songshelf.slug import slugify
from songshelf.store.protocol import ListStoreProto


def _iso_utc_now() -> str:
    ts = datetime.now(UTC).isoformat()
    return ts.replace("+00:00", "Z")


def _new_list_id() -> str:
    return uuid.uuid4().hex


class ListService:
    """Create, rename and delete song lists and manage the songs in them."""

    def __init__(
        self,
        store: ListStoreProto,
        *,
        clock: Callable[[], str] = _iso_utc_now,
        id_factory: Callable[[], str] = _new_list_id,
    ) -> None:
        self._store = store
        self._clock = clock
        self._id_factory = id_factory
        self._logger = get_logger(__name__)

    def create_list(self, user_id: str, name: str, description: str = "") -> SongList:
        clean = name.strip()
        if clean == "":
            raise AppError(code=ErrorCode.INVALID_LIST_NAME, message="list name is required")
        self._store.ensure_user(user_id)
        lst: SongList = {
            "id": self._id_factory(),
            "owner": user_id,
            "name": clean,
            "description": description,
            "slug": slugify(clean),
            "created_at": self._clock(),
        }
        self._store.put_list(lst)
        self._logger.info("list_created", extra={"user_id": user_id, "list_id": lst["id"]})
        return lst

    def get_lists(self, user_id: str) -> list[SongList]:
        lists = self._store.list_lists_for_user(user_id)
        return sorted(lists, key=lambda lst: lst["created_at"])

    def get_list_by_slug(self, user_id: str, slug: str) -> SongList | None:
        """Return the oldest list with the given slug, or None."""
        for lst in self.get_lists(user_id):
            if lst["slug"] == slug:
                return lst
        return None

    def update_list(
        self, user_id: str, list_id: str, name: str, description: str = ""
    ) -> SongList:
        """Replace the description; a non-blank name also renames and re-slugs."""
        lst = self._store.get_list(user_id, list_id)
        clean = name.strip()
        if clean != "":
            lst["name"] = clean
            lst["slug"] = slugify(clean)
        lst["description"] = description
        self._store.put_list(lst)
        return lst

    def delete_list(self, user_id: str, list_id: str) -> None:
        self._store.delete_list(user_id, list_id)
        self._logger.info("list_deleted", extra={"user_id": user_id, "list_id": list_id})

    def add_song(self, user_id: str, list_id: str, song: Song) -> str:
        self._store.put_song(user_id, list_id, song)
        return song["id"]

    def get_songs(self, user_id: str, list_id: str) -> list[Song]:
        return self._store.list_songs_for_list(user_id, list_id)

    def delete_song(self, user_id: str, list_id: str, song_id: str) -> None:
        self._store.delete_song(user_id, list_id, song_id)


__all__ = ["ListService"]
