from __future__ import annotations

import pytest

from songshelf import ErrorCode, InMemoryListStore, NotFoundError
from songshelf.testing import make_list, make_song


def test_unknown_user_raises_not_found() -> None:
    store = InMemoryListStore()
    with pytest.raises(NotFoundError):
        store.list_lists_for_user("nobody")
    with pytest.raises(NotFoundError):
        store.list_songs_for_list("nobody", "l1")


def test_unknown_list_raises_list_not_found() -> None:
    store = InMemoryListStore()
    store.ensure_user("u1")
    with pytest.raises(NotFoundError) as excinfo:
        store.list_songs_for_list("u1", "missing")
    assert excinfo.value.code == ErrorCode.LIST_NOT_FOUND


def test_put_song_overwrites_same_id() -> None:
    store = InMemoryListStore()
    store.ensure_user("u1")
    store.put_list(make_list("l1", owner="u1"))
    store.put_song("u1", "l1", make_song(1, title="First"))
    store.put_song("u1", "l1", make_song(1, title="Second"))

    songs = store.list_songs_for_list("u1", "l1")

    assert [s["title"] for s in songs] == ["Second"]


def test_returned_records_are_copies() -> None:
    store = InMemoryListStore()
    store.ensure_user("u1")
    store.put_list(make_list("l1", owner="u1"))

    lst = store.get_list("u1", "l1")
    lst["name"] = "mutated"

    assert store.get_list("u1", "l1")["name"] == "List l1"


def test_delete_list_removes_songs_and_delete_song_is_noop_when_absent() -> None:
    store = InMemoryListStore()
    store.ensure_user("u1")
    store.put_list(make_list("l1", owner="u1"))
    store.put_song("u1", "l1", make_song(1))
    store.delete_song("u1", "l1", "does-not-exist")
    assert len(store.list_songs_for_list("u1", "l1")) == 1

    store.delete_list("u1", "l1")

    assert store.list_lists_for_user("u1") == []
    with pytest.raises(NotFoundError):
        store.list_songs_for_list("u1", "l1")
    with pytest.raises(NotFoundError):
        store.delete_list("u1", "l1")
