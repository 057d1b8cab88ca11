from songshelf.analytics.stats import StatsAggregator, compute_stats
from songshelf.errors import AppError, Cancelled, ErrorCode, FetchError, NotFoundError
from songshelf.lists import ListService
from songshelf.models import AggregatedStats, Song, SongList, TopAlbum, TopArtist
from songshelf.slug import slugify
from songshelf.store.memory import InMemoryListStore
from songshelf.store.protocol import ListReaderProto, ListStoreProto

__all__ = [
    "AggregatedStats",
    "AppError",
    "Cancelled",
    "ErrorCode",
    "FetchError",
    "InMemoryListStore",
    "ListReaderProto",
    "ListService",
    "ListStoreProto",
    "NotFoundError",
    "Song",
    "SongList",
    "StatsAggregator",
    "TopAlbum",
    "TopArtist",
    "compute_stats",
    "slugify",
]
