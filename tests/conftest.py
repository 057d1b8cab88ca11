"""Shared test fixtures for songshelf tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from songshelf import _test_hooks
from songshelf.config import _test_hooks as config_test_hooks
from songshelf.testing import FakeEnv


@pytest.fixture(autouse=True)
def _reset_test_hooks() -> Generator[None, None, None]:
    """Restore every hook to its production default after each test."""
    original_get_env = config_test_hooks.get_env
    original_http_get = _test_hooks.http_get
    original_redis_factory = _test_hooks.redis_factory

    yield

    config_test_hooks.get_env = original_get_env
    _test_hooks.http_get = original_http_get
    _test_hooks.redis_factory = original_redis_factory


@pytest.fixture(autouse=True)
def fake_env(_reset_test_hooks: None) -> FakeEnv:
    """Start every test from an empty environment so host vars never leak in."""
    env = FakeEnv()
    config_test_hooks.get_env = env
    return env
