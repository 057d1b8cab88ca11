from songshelf.store.memory import InMemoryListStore
from songshelf.store.protocol import ListReaderProto, ListStoreProto
from songshelf.store.redis_store import RedisListStore, RedisStrProto, redis_for_kv

__all__ = [
    "InMemoryListStore",
    "ListReaderProto",
    "ListStoreProto",
    "RedisListStore",
    "RedisStrProto",
    "redis_for_kv",
]
