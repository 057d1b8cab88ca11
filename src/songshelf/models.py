from __future__ import annotations

from typing import Final

from typing_extensions import TypedDict


class Song(TypedDict):
    id: str
    title: str
    artist: str | None
    album: str | None
    artwork: str
    preview_url: str


class SongList(TypedDict):
    id: str
    owner: str
    name: str
    description: str
    slug: str
    created_at: str  # ISO 8601 timestamp


class TopArtist(TypedDict):
    name: str
    count: int


class TopAlbum(TypedDict):
    album: str
    artist: str
    count: int


class AggregatedStats(TypedDict):
    total_songs: int
    top_artists: list[TopArtist]
    top_albums: list[TopAlbum]


UNKNOWN_ARTIST: Final[str] = "Unknown Artist"
UNKNOWN_ALBUM: Final[str] = "Unknown Album"
DEFAULT_TOP_N: Final[int] = 5
