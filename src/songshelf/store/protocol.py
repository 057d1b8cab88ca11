from __future__ import annotations

from typing import Protocol, runtime_checkable

from songshelf.models import Song, SongList


@runtime_checkable
class ListReaderProto(Protocol):
    """Read side of a list store, the only part the stats aggregator needs.

    Both methods raise NotFoundError when the user id is unknown.
    """

    def list_lists_for_user(self, user_id: str) -> list[SongList]:
        """Return every list owned by the user, songs not included."""
        ...

    def list_songs_for_list(self, user_id: str, list_id: str) -> list[Song]:
        """Return the songs of one list; NotFoundError if the list is absent."""
        ...


@runtime_checkable
class ListStoreProto(ListReaderProto, Protocol):
    """Document store holding users, their lists, and each list's songs."""

    def ensure_user(self, user_id: str) -> None: ...

    def put_list(self, lst: SongList) -> None: ...

    def get_list(self, user_id: str, list_id: str) -> SongList: ...

    def delete_list(self, user_id: str, list_id: str) -> None: ...

    def put_song(self, user_id: str, list_id: str, song: Song) -> None: ...

    def delete_song(self, user_id: str, list_id: str, song_id: str) -> None: ...


__all__ = ["ListReaderProto", "ListStoreProto"]
