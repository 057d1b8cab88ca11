from __future__ import annotations

from typing import TypedDict

from songshelf.logging import LogFormat, LogLevel

from ._utils import (
    _optional_env_str,
    _parse_float,
    _parse_int,
    _parse_log_format,
    _parse_log_level,
    _parse_str,
)

DEFAULT_SEARCH_URL = "https://itunes.apple.com/search"


class SongshelfSettings(TypedDict, total=True):
    redis_url: str | None
    log_level: LogLevel
    log_format: LogFormat
    search_url: str
    search_timeout_seconds: float
    search_limit: int
    stats_top_n: int
    stats_max_workers: int


def load_songshelf_settings() -> SongshelfSettings:
    """Read settings from the environment; REDIS_URL unset selects the in-memory store."""
    top_n = _parse_int("STATS_TOP_N", 5)
    if top_n < 1:
        raise ValueError("STATS_TOP_N must be >= 1")
    max_workers = _parse_int("STATS_MAX_WORKERS", 1)
    if max_workers < 1:
        raise ValueError("STATS_MAX_WORKERS must be >= 1")
    return {
        "redis_url": _optional_env_str("REDIS_URL"),
        "log_level": _parse_log_level("LOG_LEVEL", "INFO"),
        "log_format": _parse_log_format("LOG_FORMAT", "json"),
        "search_url": _parse_str("ITUNES_SEARCH_URL", DEFAULT_SEARCH_URL),
        "search_timeout_seconds": _parse_float("SEARCH_TIMEOUT_SECONDS", 10.0),
        "search_limit": _parse_int("SEARCH_LIMIT", 35),
        "stats_top_n": top_n,
        "stats_max_workers": max_workers,
    }


__all__ = [
    "DEFAULT_SEARCH_URL",
    "SongshelfSettings",
    "load_songshelf_settings",
]
