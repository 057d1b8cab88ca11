from __future__ import annotations

import pytest

from songshelf.config import DEFAULT_SEARCH_URL, load_songshelf_settings
from songshelf.testing import FakeEnv


def test_defaults_with_empty_environment() -> None:
    settings = load_songshelf_settings()

    assert settings == {
        "redis_url": None,
        "log_level": "INFO",
        "log_format": "json",
        "search_url": DEFAULT_SEARCH_URL,
        "search_timeout_seconds": 10.0,
        "search_limit": 35,
        "stats_top_n": 5,
        "stats_max_workers": 1,
    }


def test_environment_overrides(fake_env: FakeEnv) -> None:
    fake_env.set("REDIS_URL", " redis://cache:6379/1 ")
    fake_env.set("LOG_LEVEL", "debug")
    fake_env.set("LOG_FORMAT", "TEXT")
    fake_env.set("ITUNES_SEARCH_URL", "http://search.local/search")
    fake_env.set("SEARCH_TIMEOUT_SECONDS", "2.5")
    fake_env.set("SEARCH_LIMIT", "10")
    fake_env.set("STATS_TOP_N", "3")
    fake_env.set("STATS_MAX_WORKERS", "4")

    settings = load_songshelf_settings()

    assert settings["redis_url"] == "redis://cache:6379/1"
    assert settings["log_level"] == "DEBUG"
    assert settings["log_format"] == "text"
    assert settings["search_url"] == "http://search.local/search"
    assert settings["search_timeout_seconds"] == 2.5
    assert settings["search_limit"] == 10
    assert settings["stats_top_n"] == 3
    assert settings["stats_max_workers"] == 4


def test_blank_redis_url_means_in_memory(fake_env: FakeEnv) -> None:
    fake_env.set("REDIS_URL", "   ")
    assert load_songshelf_settings()["redis_url"] is None


def test_unknown_log_values_fall_back(fake_env: FakeEnv) -> None:
    fake_env.set("LOG_LEVEL", "loud")
    fake_env.set("LOG_FORMAT", "xml")

    settings = load_songshelf_settings()

    assert settings["log_level"] == "INFO"
    assert settings["log_format"] == "json"


@pytest.mark.parametrize("key", ["STATS_TOP_N", "STATS_MAX_WORKERS"])
def test_non_positive_stats_settings_rejected(fake_env: FakeEnv, key: str) -> None:
    fake_env.set(key, "0")
    with pytest.raises(ValueError, match=key):
        load_songshelf_settings()


def test_non_numeric_limit_raises(fake_env: FakeEnv) -> None:
    fake_env.set("SEARCH_LIMIT", "many")
    with pytest.raises(ValueError):
        load_songshelf_settings()
