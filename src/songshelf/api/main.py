from __future__ import annotations

from fastapi import FastAPI

from songshelf import _test_hooks
from songshelf.analytics.stats import StatsAggregator
from songshelf.config import SongshelfSettings, load_songshelf_settings
from songshelf.errors import install_exception_handlers
from songshelf.lists import ListService
from songshelf.logging import setup_logging
from songshelf.request_context import install_request_id_middleware
from songshelf.search.itunes import ItunesSearchClient
from songshelf.store.memory import InMemoryListStore
from songshelf.store.protocol import ListStoreProto
from songshelf.store.redis_store import RedisListStore

from .routes import health as routes_health
from .routes import lists as routes_lists
from .routes import search as routes_search
from .routes import stats as routes_stats


def _build_store(settings: SongshelfSettings) -> ListStoreProto:
    url = settings["redis_url"]
    if url is None:
        return InMemoryListStore()
    return RedisListStore(_test_hooks.redis_factory(url))


def create_app(store: ListStoreProto | None = None) -> FastAPI:
    settings = load_songshelf_settings()
    setup_logging(
        level=settings["log_level"],
        format_mode=settings["log_format"],
        service_name="songshelf",
        instance_id=None,
        extra_fields=["request_id"],
    )
    list_store = store if store is not None else _build_store(settings)
    aggregator = StatsAggregator(
        list_store,
        top_n=settings["stats_top_n"],
        max_workers=settings["stats_max_workers"],
    )
    search_client = ItunesSearchClient(
        base_url=settings["search_url"],
        timeout_seconds=settings["search_timeout_seconds"],
        default_limit=settings["search_limit"],
    )

    app = FastAPI(title="songshelf", version="0.1.0")
    install_exception_handlers(app, logger_name="songshelf")
    install_request_id_middleware(app)

    app.include_router(routes_health.build_router())
    app.include_router(routes_stats.build_router(aggregator))
    app.include_router(routes_lists.build_router(ListService(list_store)))
    app.include_router(routes_search.build_router(search_client))
    return app


__all__ = ["create_app"]
