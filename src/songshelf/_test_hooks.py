"""Test hooks for songshelf - allows injecting test dependencies.

Production code calls these module-level callables directly; tests assign
fakes before running the code under test and conftest restores them.

Usage in production code:
    from songshelf import _test_hooks
    resp = _test_hooks.http_get(url, params, timeout)

Usage in tests:
    from songshelf import _test_hooks
    _test_hooks.http_get = make_fake_http_get(200, body)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypedDict

import httpx

from songshelf.store.redis_store import RedisStrProto, redis_for_kv


class HttpResult(TypedDict):
    status_code: int
    text: str


HttpGetHook = Callable[[str, dict[str, str], float], HttpResult]
RedisFactoryHook = Callable[[str], RedisStrProto]


def _default_http_get(url: str, params: dict[str, str], timeout: float) -> HttpResult:
    """Production implementation - one GET through a short-lived httpx client."""
    with httpx.Client(timeout=httpx.Timeout(timeout)) as client:
        resp = client.get(url, params=params)
    return {"status_code": resp.status_code, "text": resp.text}


def _default_redis_factory(url: str) -> RedisStrProto:
    """Production implementation - real redis client."""
    return redis_for_kv(url)


http_get: HttpGetHook = _default_http_get
redis_factory: RedisFactoryHook = _default_redis_factory
