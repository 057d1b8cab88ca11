from __future__ import annotations

import threading

from songshelf.errors import ErrorCode, NotFoundError
from songshelf.models import Song, SongList
from songshelf.store.protocol import ListStoreProto


class _UserLists:
    def __init__(self) -> None:
        self.lists: dict[str, SongList] = {}
        self.songs: dict[str, dict[str, Song]] = {}


class InMemoryListStore(ListStoreProto):
    """Dict-backed list store for tests and single-process deployments."""

    def __init__(self) -> None:
        self._users: dict[str, _UserLists] = {}
        self._lock = threading.Lock()

    def _user(self, user_id: str) -> _UserLists:
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError(f"user {user_id} not found")
        return user

    def _songs(self, user_id: str, list_id: str) -> dict[str, Song]:
        user = self._user(user_id)
        songs = user.songs.get(list_id)
        if songs is None:
            raise NotFoundError(f"list {list_id} not found", code=ErrorCode.LIST_NOT_FOUND)
        return songs

    def ensure_user(self, user_id: str) -> None:
        with self._lock:
            if user_id not in self._users:
                self._users[user_id] = _UserLists()

    def list_lists_for_user(self, user_id: str) -> list[SongList]:
        with self._lock:
            return [lst.copy() for lst in self._user(user_id).lists.values()]

    def list_songs_for_list(self, user_id: str, list_id: str) -> list[Song]:
        with self._lock:
            return [song.copy() for song in self._songs(user_id, list_id).values()]

    def put_list(self, lst: SongList) -> None:
        with self._lock:
            user = self._user(lst["owner"])
            user.lists[lst["id"]] = lst.copy()
            user.songs.setdefault(lst["id"], {})

    def get_list(self, user_id: str, list_id: str) -> SongList:
        with self._lock:
            lst = self._user(user_id).lists.get(list_id)
            if lst is None:
                raise NotFoundError(f"list {list_id} not found", code=ErrorCode.LIST_NOT_FOUND)
            return lst.copy()

    def delete_list(self, user_id: str, list_id: str) -> None:
        with self._lock:
            user = self._user(user_id)
            if list_id not in user.lists:
                raise NotFoundError(f"list {list_id} not found", code=ErrorCode.LIST_NOT_FOUND)
            del user.lists[list_id]
            user.songs.pop(list_id, None)

    def put_song(self, user_id: str, list_id: str, song: Song) -> None:
        with self._lock:
            self._songs(user_id, list_id)[song["id"]] = song.copy()

    def delete_song(self, user_id: str, list_id: str, song_id: str) -> None:
        with self._lock:
            self._songs(user_id, list_id).pop(song_id, None)


__all__ = ["InMemoryListStore"]
