from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from songshelf.models import UNKNOWN_ALBUM, UNKNOWN_ARTIST, Song, TopAlbum, TopArtist


def artist_label(song: Song) -> str:
    artist = song["artist"]
    return artist if artist else UNKNOWN_ARTIST


def album_label(song: Song) -> str:
    album = song["album"]
    return album if album else UNKNOWN_ALBUM


def compute_top_artists(songs: Iterable[Song], *, limit: int = 5) -> list[TopArtist]:
    """Rank artists by song count; ties break on artist name."""
    counts: Counter[str] = Counter(artist_label(s) for s in songs)
    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))[:limit]
    return [{"name": name, "count": count} for name, count in ranked]


def compute_top_albums(songs: Iterable[Song], *, limit: int = 5) -> list[TopAlbum]:
    """Rank (album, artist) pairs by song count.

    Albums are keyed together with their artist since titles such as
    "Greatest Hits" repeat across artists. Ties break on album, then artist.
    """
    counts: Counter[tuple[str, str]] = Counter((album_label(s), artist_label(s)) for s in songs)
    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0][0], kv[0][1]))[:limit]
    return [{"album": album, "artist": artist, "count": count} for (album, artist), count in ranked]


__all__ = ["album_label", "artist_label", "compute_top_albums", "compute_top_artists"]
