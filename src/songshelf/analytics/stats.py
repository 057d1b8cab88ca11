from __future__ import annotations

import time
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, as_completed

from songshelf.analytics.ranking import compute_top_albums, compute_top_artists
from songshelf.errors import Cancelled, ErrorCode, FetchError, NotFoundError
from songshelf.logging import get_logger
from songshelf.models import DEFAULT_TOP_N, AggregatedStats, Song, SongList
from songshelf.store.protocol import ListReaderProto

CancelledFn = Callable[[], bool]


def _never_cancelled() -> bool:
    return False


class StatsAggregator:
    """Compute a user's listening stats from every song in every list.

    Songs are deduplicated by id across lists, so a track saved to three
    lists counts once. When the same id carries different metadata in two
    lists, the copy merged last wins; lists merge in the order the store
    returned them.

    Any store failure other than an unknown user aborts the computation with
    FetchError. Nothing partial is ever returned.
    """

    def __init__(
        self,
        store: ListReaderProto,
        *,
        top_n: int = DEFAULT_TOP_N,
        max_workers: int = 1,
    ) -> None:
        self._store = store
        self._top_n = max(1, int(top_n))
        self._max_workers = max(1, int(max_workers))
        self._logger = get_logger(__name__)

    def compute_stats(
        self, user_id: str, *, cancelled: CancelledFn | None = None
    ) -> AggregatedStats:
        is_cancelled = cancelled if cancelled is not None else _never_cancelled
        started = time.perf_counter()

        try:
            lists = self._fetch_lists(user_id, is_cancelled)
            if self._max_workers > 1 and len(lists) > 1:
                per_list = self._fetch_songs_parallel(user_id, lists, is_cancelled)
            else:
                per_list = self._fetch_songs_sequential(user_id, lists, is_cancelled)
        except Cancelled:
            self._logger.info("stats_cancelled", extra={"user_id": user_id})
            raise
        except FetchError as exc:
            self._logger.warning(
                "stats_fetch_failed",
                extra={"user_id": user_id, "error_code": exc.code.value},
            )
            raise

        unique: dict[str, Song] = {}
        for songs in per_list:
            for song in songs:
                unique[song["id"]] = song

        songs_view = list(unique.values())
        result: AggregatedStats = {
            "total_songs": len(unique),
            "top_artists": compute_top_artists(songs_view, limit=self._top_n),
            "top_albums": compute_top_albums(songs_view, limit=self._top_n),
        }
        self._logger.info(
            "stats_computed",
            extra={
                "user_id": user_id,
                "list_count": len(lists),
                "total_songs": result["total_songs"],
                "latency_ms": int((time.perf_counter() - started) * 1000),
            },
        )
        return result

    def _fetch_lists(self, user_id: str, is_cancelled: CancelledFn) -> list[SongList]:
        if is_cancelled():
            raise Cancelled()
        try:
            return self._store.list_lists_for_user(user_id)
        except NotFoundError:
            raise
        except Exception as exc:
            raise FetchError(f"failed to read lists for user {user_id}", cause=exc) from exc

    def _fetch_songs(self, user_id: str, list_id: str) -> list[Song]:
        try:
            return self._store.list_songs_for_list(user_id, list_id)
        except NotFoundError as exc:
            if exc.code == ErrorCode.USER_NOT_FOUND:
                raise
            # A list removed between the two reads is a failed read, not an unknown user.
            raise FetchError(f"list {list_id} disappeared during read", cause=exc) from exc
        except Exception as exc:
            raise FetchError(f"failed to read songs for list {list_id}", cause=exc) from exc

    def _fetch_songs_sequential(
        self, user_id: str, lists: list[SongList], is_cancelled: CancelledFn
    ) -> list[list[Song]]:
        out: list[list[Song]] = []
        for lst in lists:
            if is_cancelled():
                raise Cancelled()
            out.append(self._fetch_songs(user_id, lst["id"]))
        return out

    def _fetch_songs_parallel(
        self, user_id: str, lists: list[SongList], is_cancelled: CancelledFn
    ) -> list[list[Song]]:
        def work(list_id: str) -> list[Song]:
            if is_cancelled():
                raise Cancelled()
            return self._fetch_songs(user_id, list_id)

        # Slots are indexed by list position so merging matches the sequential path.
        out: list[list[Song]] = [[] for _ in lists]
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            futures: dict[Future[list[Song]], int] = {
                pool.submit(work, lst["id"]): idx for idx, lst in enumerate(lists)
            }
            try:
                for fut in as_completed(futures):
                    out[futures[fut]] = fut.result()
            except Exception:
                for pending in futures:
                    pending.cancel()
                raise
        return out


def compute_stats(
    store: ListReaderProto,
    user_id: str,
    *,
    top_n: int = DEFAULT_TOP_N,
    cancelled: CancelledFn | None = None,
) -> AggregatedStats:
    return StatsAggregator(store, top_n=top_n).compute_stats(user_id, cancelled=cancelled)


__all__ = ["CancelledFn", "StatsAggregator", "compute_stats"]
