"""Fakes and builders for songshelf tests.

The fakes implement the public protocols with in-memory state so tests never
need a redis server or network access.
"""

from __future__ import annotations

from collections.abc import Callable

from songshelf._test_hooks import HttpGetHook, HttpResult
from songshelf.json_utils import dump_json_str
from songshelf.models import Song, SongList
from songshelf.store.memory import InMemoryListStore
from songshelf.store.redis_store import RedisPipelineProto, RedisStrProto

# =============================================================================
# Builders
# =============================================================================


def make_song(
    song_id: str | int,
    *,
    title: str | None = None,
    artist: str | None = "Artist",
    album: str | None = "Album",
) -> Song:
    sid = str(song_id)
    return {
        "id": sid,
        "title": title if title is not None else f"Song {sid}",
        "artist": artist,
        "album": album,
        "artwork": f"https://art.example/{sid}.jpg",
        "preview_url": f"https://preview.example/{sid}.m4a",
    }


def make_list(list_id: str, *, owner: str, name: str | None = None) -> SongList:
    return {
        "id": list_id,
        "owner": owner,
        "name": name if name is not None else f"List {list_id}",
        "description": "",
        "slug": list_id,
        "created_at": "2024-01-01T00:00:00Z",
    }


def seed_store(store: InMemoryListStore, user_id: str, lists: dict[str, list[Song]]) -> None:
    """Create a user owning one list per key, filled with the given songs."""
    store.ensure_user(user_id)
    for list_id, songs in lists.items():
        store.put_list(make_list(list_id, owner=user_id))
        for song in songs:
            store.put_song(user_id, list_id, song)


# =============================================================================
# Fake list stores
# =============================================================================


class RecordingListStore(InMemoryListStore):
    """In-memory store that records every read and can fail on demand."""

    def __init__(
        self,
        *,
        fail_lists_with: Exception | None = None,
        fail_songs_for: dict[str, Exception] | None = None,
        on_songs_read: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__()
        self.reads: list[tuple[str, str]] = []
        self._fail_lists_with = fail_lists_with
        self._fail_songs_for = fail_songs_for if fail_songs_for is not None else {}
        self._on_songs_read = on_songs_read

    def list_lists_for_user(self, user_id: str) -> list[SongList]:
        self.reads.append(("lists", user_id))
        if self._fail_lists_with is not None:
            raise self._fail_lists_with
        return super().list_lists_for_user(user_id)

    def list_songs_for_list(self, user_id: str, list_id: str) -> list[Song]:
        self.reads.append(("songs", list_id))
        if self._on_songs_read is not None:
            self._on_songs_read(list_id)
        failure = self._fail_songs_for.get(list_id)
        if failure is not None:
            raise failure
        return super().list_songs_for_list(user_id, list_id)


# =============================================================================
# Fake redis
# =============================================================================


class FakeRedis(RedisStrProto):
    """In-memory stand-in for the redis commands the list store uses."""

    def __init__(self) -> None:
        self._hashes: dict[str, dict[str, str]] = {}
        self._sets: dict[str, set[str]] = {}
        self.calls: list[str] = []
        self.closed = False

    def hset(self, key: str, mapping: dict[str, str]) -> int:
        self.calls.append("hset")
        current = self._hashes.setdefault(key, {})
        added = len([k for k in mapping if k not in current])
        current.update(mapping)
        return added

    def hgetall(self, key: str) -> dict[str, str]:
        self.calls.append("hgetall")
        return dict(self._hashes.get(key, {}))

    def delete(self, *keys: str) -> int:
        self.calls.append("delete")
        removed = 0
        for key in keys:
            if self._hashes.pop(key, None) is not None:
                removed += 1
            if self._sets.pop(key, None) is not None:
                removed += 1
        return removed

    def sadd(self, key: str, member: str) -> int:
        self.calls.append("sadd")
        members = self._sets.setdefault(key, set())
        if member in members:
            return 0
        members.add(member)
        return 1

    def srem(self, key: str, member: str) -> int:
        self.calls.append("srem")
        members = self._sets.get(key)
        if members is None or member not in members:
            return 0
        members.remove(member)
        if not members:
            # Redis drops empty sets.
            del self._sets[key]
        return 1

    def smembers(self, key: str) -> set[str]:
        self.calls.append("smembers")
        return set(self._sets.get(key, set()))

    def sismember(self, key: str, member: str) -> bool:
        self.calls.append("sismember")
        return member in self._sets.get(key, set())

    def pipeline(self) -> RedisPipelineProto:
        return _FakePipeline(self)

    def close(self) -> None:
        self.closed = True

    def keys(self) -> set[str]:
        return set(self._hashes) | set(self._sets)


class _FakePipeline(RedisPipelineProto):
    """Buffers writes and applies them in one step, bracketed by multi/exec in ``calls``."""

    def __init__(self, owner: FakeRedis) -> None:
        self._owner = owner
        self._queued: list[Callable[[], object]] = []

    def hset(self, key: str, mapping: dict[str, str]) -> None:
        self._queued.append(lambda: self._owner.hset(key, mapping=mapping))

    def delete(self, *keys: str) -> None:
        self._queued.append(lambda: self._owner.delete(*keys))

    def sadd(self, key: str, member: str) -> None:
        self._queued.append(lambda: self._owner.sadd(key, member))

    def srem(self, key: str, member: str) -> None:
        self._queued.append(lambda: self._owner.srem(key, member))

    def execute(self) -> None:
        self._owner.calls.append("multi")
        for command in self._queued:
            command()
        self._queued.clear()
        self._owner.calls.append("exec")


# =============================================================================
# Fake environment
# =============================================================================


class FakeEnv:
    """Mutable environment backing the config get_env hook."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values) if values is not None else {}

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def __call__(self, key: str) -> str | None:
        return self._values.get(key)


# =============================================================================
# Fake HTTP
# =============================================================================


def make_fake_http_get(
    status_code: int, body: str, *, seen: list[tuple[str, dict[str, str]]] | None = None
) -> HttpGetHook:
    """Build an http_get hook returning a canned response and recording requests."""

    def _get(url: str, params: dict[str, str], timeout: float) -> HttpResult:
        if seen is not None:
            seen.append((url, params))
        return {"status_code": status_code, "text": body}

    return _get


def itunes_body(*items: dict[str, str | int]) -> str:
    return dump_json_str({"resultCount": len(items), "results": list(items)})


__all__ = [
    "FakeEnv",
    "FakeRedis",
    "RecordingListStore",
    "itunes_body",
    "make_fake_http_get",
    "make_list",
    "make_song",
    "seed_store",
]
