from __future__ import annotations

from typing import Protocol, runtime_checkable

from songshelf.errors import ErrorCode, NotFoundError
from songshelf.models import Song, SongList
from songshelf.store.decoders import (
    decode_list_hash,
    decode_song_hash,
    encode_list_hash,
    encode_song_hash,
)
from songshelf.store.protocol import ListStoreProto

_USERS_KEY = "songshelf:users"


def _lists_key(user_id: str) -> str:
    return f"songshelf:user:{user_id}:lists"


def _list_key(user_id: str, list_id: str) -> str:
    return f"songshelf:user:{user_id}:list:{list_id}"


def _songs_key(user_id: str, list_id: str) -> str:
    return f"songshelf:user:{user_id}:list:{list_id}:songs"


def _song_key(user_id: str, list_id: str, song_id: str) -> str:
    return f"songshelf:user:{user_id}:list:{list_id}:song:{song_id}"


@runtime_checkable
class RedisPipelineProto(Protocol):
    """Write commands queued in a MULTI/EXEC block and applied by ``execute``."""

    def hset(self, key: str, mapping: dict[str, str]) -> None: ...

    def delete(self, *keys: str) -> None: ...

    def sadd(self, key: str, member: str) -> None: ...

    def srem(self, key: str, member: str) -> None: ...

    def execute(self) -> None: ...


@runtime_checkable
class RedisStrProto(Protocol):
    """The subset of a decode_responses=True redis client used by the store."""

    def hset(self, key: str, mapping: dict[str, str]) -> int: ...

    def hgetall(self, key: str) -> dict[str, str]: ...

    def delete(self, *keys: str) -> int: ...

    def sadd(self, key: str, member: str) -> int: ...

    def srem(self, key: str, member: str) -> int: ...

    def smembers(self, key: str) -> set[str]: ...

    def sismember(self, key: str, member: str) -> bool: ...

    def pipeline(self) -> RedisPipelineProto: ...

    def close(self) -> None: ...


class _RedisPipelineClient(Protocol):
    def hset(self, name: str, mapping: dict[str, str]) -> object: ...
    def delete(self, *names: str) -> object: ...
    def sadd(self, name: str, *values: str) -> object: ...
    def srem(self, name: str, *values: str) -> object: ...
    def execute(self) -> list[object]: ...


class _RedisStrClient(Protocol):
    def hset(self, name: str, mapping: dict[str, str]) -> int: ...
    def hgetall(self, name: str) -> dict[str, str]: ...
    def delete(self, *names: str) -> int: ...
    def sadd(self, name: str, *values: str) -> int: ...
    def srem(self, name: str, *values: str) -> int: ...
    def smembers(self, name: str) -> set[str]: ...
    def sismember(self, name: str, value: str) -> bool | int: ...
    def pipeline(self, transaction: bool = True) -> _RedisPipelineClient: ...
    def close(self) -> None: ...


class _RedisStrModule(Protocol):
    def from_url(
        self,
        url: str,
        *,
        encoding: str,
        decode_responses: bool,
        socket_connect_timeout: float,
        socket_timeout: float,
        retry_on_timeout: bool,
    ) -> _RedisStrClient: ...


class _RedisPipelineAdapter(RedisPipelineProto):
    def __init__(self, inner: _RedisPipelineClient) -> None:
        self._inner = inner

    def hset(self, key: str, mapping: dict[str, str]) -> None:
        self._inner.hset(name=key, mapping=mapping)

    def delete(self, *keys: str) -> None:
        self._inner.delete(*keys)

    def sadd(self, key: str, member: str) -> None:
        self._inner.sadd(key, member)

    def srem(self, key: str, member: str) -> None:
        self._inner.srem(key, member)

    def execute(self) -> None:
        self._inner.execute()


class _RedisStrAdapter(RedisStrProto):
    def __init__(self, inner: _RedisStrClient) -> None:
        self._inner = inner

    def hset(self, key: str, mapping: dict[str, str]) -> int:
        return int(self._inner.hset(name=key, mapping=mapping))

    def hgetall(self, key: str) -> dict[str, str]:
        raw = self._inner.hgetall(name=key)
        return {str(k): str(v) for k, v in raw.items()}

    def delete(self, *keys: str) -> int:
        return int(self._inner.delete(*keys))

    def sadd(self, key: str, member: str) -> int:
        return int(self._inner.sadd(key, member))

    def srem(self, key: str, member: str) -> int:
        return int(self._inner.srem(key, member))

    def smembers(self, key: str) -> set[str]:
        return {str(m) for m in self._inner.smembers(name=key)}

    def sismember(self, key: str, member: str) -> bool:
        return bool(self._inner.sismember(name=key, value=member))

    def pipeline(self) -> RedisPipelineProto:
        return _RedisPipelineAdapter(self._inner.pipeline(transaction=True))

    def close(self) -> None:
        self._inner.close()


def redis_for_kv(url: str) -> RedisStrProto:
    """Open a string-mode redis client for the list store."""
    redis_mod: _RedisStrModule = __import__("redis")
    client = redis_mod.from_url(
        url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=1.0,
        socket_timeout=1.0,
        retry_on_timeout=True,
    )
    return _RedisStrAdapter(client)


class RedisListStore(ListStoreProto):
    """List store backed by redis hashes and sets.

    Each list and each song is one hash; membership is tracked in sets so a
    user's lists and a list's songs can be enumerated without SCAN. Every
    mutation is a single MULTI/EXEC pipeline. A member whose hash is already
    gone was removed after the membership read and is skipped.
    """

    def __init__(self, client: RedisStrProto) -> None:
        self._r = client

    def _require_user(self, user_id: str) -> None:
        if not self._r.sismember(_USERS_KEY, user_id):
            raise NotFoundError(f"user {user_id} not found")

    def _require_list(self, user_id: str, list_id: str) -> None:
        self._require_user(user_id)
        if not self._r.sismember(_lists_key(user_id), list_id):
            raise NotFoundError(f"list {list_id} not found", code=ErrorCode.LIST_NOT_FOUND)

    def ensure_user(self, user_id: str) -> None:
        self._r.sadd(_USERS_KEY, user_id)

    def list_lists_for_user(self, user_id: str) -> list[SongList]:
        self._require_user(user_id)
        out: list[SongList] = []
        for list_id in sorted(self._r.smembers(_lists_key(user_id))):
            raw = self._r.hgetall(_list_key(user_id, list_id))
            if not raw:
                continue
            out.append(decode_list_hash(raw))
        return out

    def list_songs_for_list(self, user_id: str, list_id: str) -> list[Song]:
        self._require_list(user_id, list_id)
        out: list[Song] = []
        for song_id in sorted(self._r.smembers(_songs_key(user_id, list_id))):
            raw = self._r.hgetall(_song_key(user_id, list_id, song_id))
            if not raw:
                continue
            out.append(decode_song_hash(raw))
        return out

    def put_list(self, lst: SongList) -> None:
        user_id = lst["owner"]
        self._require_user(user_id)
        pipe = self._r.pipeline()
        pipe.hset(_list_key(user_id, lst["id"]), mapping=encode_list_hash(lst))
        pipe.sadd(_lists_key(user_id), lst["id"])
        pipe.execute()

    def get_list(self, user_id: str, list_id: str) -> SongList:
        self._require_list(user_id, list_id)
        raw = self._r.hgetall(_list_key(user_id, list_id))
        if not raw:
            raise NotFoundError(f"list {list_id} not found", code=ErrorCode.LIST_NOT_FOUND)
        return decode_list_hash(raw)

    def delete_list(self, user_id: str, list_id: str) -> None:
        self._require_list(user_id, list_id)
        song_ids = self._r.smembers(_songs_key(user_id, list_id))
        keys = [_song_key(user_id, list_id, sid) for sid in sorted(song_ids)]
        pipe = self._r.pipeline()
        pipe.srem(_lists_key(user_id), list_id)
        pipe.delete(_list_key(user_id, list_id), _songs_key(user_id, list_id), *keys)
        pipe.execute()

    def put_song(self, user_id: str, list_id: str, song: Song) -> None:
        self._require_list(user_id, list_id)
        key = _song_key(user_id, list_id, song["id"])
        pipe = self._r.pipeline()
        # Overwrite semantics: drop any previous copy so optional fields do not linger.
        pipe.delete(key)
        pipe.hset(key, mapping=encode_song_hash(song))
        pipe.sadd(_songs_key(user_id, list_id), song["id"])
        pipe.execute()

    def delete_song(self, user_id: str, list_id: str, song_id: str) -> None:
        self._require_list(user_id, list_id)
        pipe = self._r.pipeline()
        pipe.srem(_songs_key(user_id, list_id), song_id)
        pipe.delete(_song_key(user_id, list_id, song_id))
        pipe.execute()


__all__ = ["RedisListStore", "RedisPipelineProto", "RedisStrProto", "redis_for_kv"]
