from __future__ import annotations

import httpx

from songshelf import _test_hooks
from songshelf.config import DEFAULT_SEARCH_URL
from songshelf.errors import AppError, ErrorCode
from songshelf.json_utils import InvalidJsonError, JSONValue, load_json_str
from songshelf.logging import get_logger
from songshelf.models import Song

_ARTWORK_SMALL = "100x100bb"
_ARTWORK_LARGE = "300x300bb"


def _opt_str(item: dict[str, JSONValue], key: str) -> str | None:
    val = item.get(key)
    return val if isinstance(val, str) else None


def _decode_itunes_track(item: JSONValue) -> Song | None:
    """Map one iTunes search result to a Song; None when it has no track id.

    Expected minimal shape (keys used):
    {
        "trackId": 1440833098,
        "trackName": "Track Title",
        "artistName": "Artist Name",
        "collectionName": "Album Name",
        "artworkUrl100": "https://.../100x100bb.jpg",
        "previewUrl": "https://.../preview.m4a"
    }
    """
    if not isinstance(item, dict):
        return None
    track_id = item.get("trackId")
    if isinstance(track_id, bool) or not isinstance(track_id, (int, str)):
        return None
    artwork = _opt_str(item, "artworkUrl100") or ""
    return {
        "id": str(track_id),
        "title": _opt_str(item, "trackName") or "",
        "artist": _opt_str(item, "artistName"),
        "album": _opt_str(item, "collectionName"),
        "artwork": artwork.replace(_ARTWORK_SMALL, _ARTWORK_LARGE),
        "preview_url": _opt_str(item, "previewUrl") or "",
    }


class ItunesSearchClient:
    """Song lookup against the public iTunes Search API."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_SEARCH_URL,
        timeout_seconds: float = 10.0,
        default_limit: int = 35,
    ) -> None:
        self._base_url = base_url
        self._timeout = float(timeout_seconds)
        self._default_limit = default_limit
        self._logger = get_logger(__name__)

    def search_songs(self, query: str, *, limit: int | None = None) -> list[Song]:
        if query.strip() == "":
            return []
        params: dict[str, str] = {
            "term": query,
            "entity": "song",
            "limit": str(limit if limit is not None else self._default_limit),
        }
        try:
            resp = _test_hooks.http_get(self._base_url, params, self._timeout)
        except httpx.HTTPError as exc:
            raise AppError(code=ErrorCode.SEARCH_FAILED, message="catalog unreachable") from exc
        if resp["status_code"] != 200:
            raise AppError(
                code=ErrorCode.SEARCH_FAILED,
                message=f"catalog search failed with status {resp['status_code']}",
            )
        try:
            doc = load_json_str(resp["text"])
        except InvalidJsonError as exc:
            raise AppError(code=ErrorCode.SEARCH_FAILED, message="invalid catalog json") from exc
        results = doc.get("results") if isinstance(doc, dict) else None
        if not isinstance(results, list):
            raise AppError(code=ErrorCode.SEARCH_FAILED, message="invalid catalog json")

        out: list[Song] = []
        for item in results:
            song = _decode_itunes_track(item)
            if song is not None:
                out.append(song)
        self._logger.info("search_completed", extra={"query": query, "result_count": len(out)})
        return out


def search_songs(query: str, *, limit: int = 35) -> list[Song]:
    return ItunesSearchClient().search_songs(query, limit=limit)


__all__ = ["ItunesSearchClient", "search_songs"]
