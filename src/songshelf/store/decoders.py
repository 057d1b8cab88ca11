from __future__ import annotations

from songshelf.models import Song, SongList


class DecoderError(ValueError):
    """Raised when a stored record fails validation."""


def _require(raw: dict[str, str], key: str) -> str:
    val = raw.get(key)
    if val is None:
        raise DecoderError(f"{key} is required")
    return val


def _require_non_empty(raw: dict[str, str], key: str) -> str:
    val = _require(raw, key)
    if val == "":
        raise DecoderError(f"{key} must be a non-empty string")
    return val


def decode_song_hash(raw: dict[str, str]) -> Song:
    """Decode a stored song hash.

    Artist and album are optional and come back as None when absent.
    """
    return {
        "id": _require_non_empty(raw, "id"),
        "title": _require(raw, "title"),
        "artist": raw.get("artist"),
        "album": raw.get("album"),
        "artwork": raw.get("artwork", ""),
        "preview_url": raw.get("preview_url", ""),
    }


def encode_song_hash(song: Song) -> dict[str, str]:
    out: dict[str, str] = {
        "id": song["id"],
        "title": song["title"],
        "artwork": song["artwork"],
        "preview_url": song["preview_url"],
    }
    artist = song["artist"]
    if artist is not None:
        out["artist"] = artist
    album = song["album"]
    if album is not None:
        out["album"] = album
    return out


def decode_list_hash(raw: dict[str, str]) -> SongList:
    return {
        "id": _require_non_empty(raw, "id"),
        "owner": _require_non_empty(raw, "owner"),
        "name": _require(raw, "name"),
        "description": raw.get("description", ""),
        "slug": _require(raw, "slug"),
        "created_at": _require_non_empty(raw, "created_at"),
    }


def encode_list_hash(lst: SongList) -> dict[str, str]:
    return {
        "id": lst["id"],
        "owner": lst["owner"],
        "name": lst["name"],
        "description": lst["description"],
        "slug": lst["slug"],
        "created_at": lst["created_at"],
    }


__all__ = [
    "DecoderError",
    "decode_list_hash",
    "decode_song_hash",
    "encode_list_hash",
    "encode_song_hash",
]
