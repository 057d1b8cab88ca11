from __future__ import annotations

from songshelf import InMemoryListStore, StatsAggregator, compute_stats
from songshelf.testing import make_song, seed_store


def test_zero_lists_yields_empty_stats() -> None:
    store = InMemoryListStore()
    store.ensure_user("u1")

    stats = StatsAggregator(store).compute_stats("u1")

    assert stats == {"total_songs": 0, "top_artists": [], "top_albums": []}


def test_empty_lists_yield_empty_stats() -> None:
    store = InMemoryListStore()
    seed_store(store, "u1", {"a": [], "b": []})

    stats = StatsAggregator(store).compute_stats("u1")

    assert stats["total_songs"] == 0
    assert stats["top_artists"] == []
    assert stats["top_albums"] == []


def test_two_list_scenario() -> None:
    store = InMemoryListStore()
    seed_store(
        store,
        "u1",
        {
            "A": [
                make_song(1, artist="X", album="M1"),
                make_song(2, artist="X", album="M2"),
            ],
            "B": [
                make_song(1, artist="X", album="M1"),
                make_song(3, artist="Y", album="M1"),
            ],
        },
    )

    stats = StatsAggregator(store).compute_stats("u1")

    assert stats["total_songs"] == 3
    assert stats["top_artists"] == [{"name": "X", "count": 2}, {"name": "Y", "count": 1}]
    albums = {(a["album"], a["artist"], a["count"]) for a in stats["top_albums"]}
    assert albums == {("M1", "X", 1), ("M2", "X", 1), ("M1", "Y", 1)}
    assert len(stats["top_albums"]) == 3


def test_same_song_in_many_lists_counts_once() -> None:
    store = InMemoryListStore()
    song = make_song("s1", artist="X", album="M")
    seed_store(store, "u1", {"a": [song], "b": [song], "c": [song]})

    stats = StatsAggregator(store).compute_stats("u1")

    assert stats["total_songs"] == 1
    assert stats["top_artists"] == [{"name": "X", "count": 1}]
    assert stats["top_albums"] == [{"album": "M", "artist": "X", "count": 1}]


def test_readding_song_to_same_list_is_idempotent() -> None:
    store = InMemoryListStore()
    seed_store(store, "u1", {"a": [make_song(1), make_song(2)]})
    before = StatsAggregator(store).compute_stats("u1")

    store.put_song("u1", "a", make_song(1))
    after = StatsAggregator(store).compute_stats("u1")

    assert before["total_songs"] == after["total_songs"] == 2


def test_last_merged_copy_supplies_metadata() -> None:
    store = InMemoryListStore()
    seed_store(
        store,
        "u1",
        {
            "a": [make_song(1, artist="Old Name", album="Old Album")],
            "b": [make_song(1, artist="New Name", album="New Album")],
        },
    )

    stats = StatsAggregator(store).compute_stats("u1")

    assert stats["total_songs"] == 1
    # Exactly one copy is counted, whichever list merged last.
    assert len(stats["top_artists"]) == 1
    assert stats["top_artists"][0]["name"] in {"Old Name", "New Name"}
    assert stats["top_artists"][0]["count"] == 1


def test_missing_artist_and_album_use_placeholders() -> None:
    store = InMemoryListStore()
    seed_store(
        store,
        "u1",
        {
            "a": [
                make_song(1, artist="", album=None),
                make_song(2, artist=None, album=""),
            ]
        },
    )

    stats = StatsAggregator(store).compute_stats("u1")

    assert stats["total_songs"] == 2
    assert stats["top_artists"] == [{"name": "Unknown Artist", "count": 2}]
    assert stats["top_albums"] == [
        {"album": "Unknown Album", "artist": "Unknown Artist", "count": 2}
    ]


def test_album_with_known_title_and_unknown_artist() -> None:
    store = InMemoryListStore()
    seed_store(store, "u1", {"a": [make_song(1, artist=None, album="Live")]})

    stats = StatsAggregator(store).compute_stats("u1")

    assert stats["top_albums"] == [{"album": "Live", "artist": "Unknown Artist", "count": 1}]


def test_same_album_title_by_different_artists_is_split() -> None:
    store = InMemoryListStore()
    seed_store(
        store,
        "u1",
        {
            "a": [
                make_song(1, artist="Queen", album="Greatest Hits"),
                make_song(2, artist="Queen", album="Greatest Hits"),
                make_song(3, artist="ABBA", album="Greatest Hits"),
            ]
        },
    )

    stats = StatsAggregator(store).compute_stats("u1")

    assert stats["top_albums"] == [
        {"album": "Greatest Hits", "artist": "Queen", "count": 2},
        {"album": "Greatest Hits", "artist": "ABBA", "count": 1},
    ]


def test_top_lists_truncate_to_five_and_sort_descending() -> None:
    store = InMemoryListStore()
    songs = []
    sid = 0
    # Artist i gets i+1 songs, each on its own album.
    for i in range(8):
        for _ in range(i + 1):
            sid += 1
            songs.append(make_song(sid, artist=f"Artist {i}", album=f"Album {i}"))
    seed_store(store, "u1", {"a": songs[:20], "b": songs[20:]})

    stats = StatsAggregator(store).compute_stats("u1")

    assert stats["total_songs"] == sid
    assert len(stats["top_artists"]) == 5
    assert len(stats["top_albums"]) == 5
    counts = [a["count"] for a in stats["top_artists"]]
    assert counts == sorted(counts, reverse=True)
    assert counts == [8, 7, 6, 5, 4]
    assert [a["name"] for a in stats["top_artists"]] == [f"Artist {i}" for i in (7, 6, 5, 4, 3)]
    album_counts = [a["count"] for a in stats["top_albums"]]
    assert album_counts == [8, 7, 6, 5, 4]


def test_ties_break_alphabetically() -> None:
    store = InMemoryListStore()
    seed_store(
        store,
        "u1",
        {
            "a": [
                make_song(1, artist="Zed", album="B"),
                make_song(2, artist="Abe", album="B"),
                make_song(3, artist="Mia", album="A"),
            ]
        },
    )

    stats = StatsAggregator(store).compute_stats("u1")

    assert [a["name"] for a in stats["top_artists"]] == ["Abe", "Mia", "Zed"]
    assert [(a["album"], a["artist"]) for a in stats["top_albums"]] == [
        ("A", "Mia"),
        ("B", "Abe"),
        ("B", "Zed"),
    ]


def test_repeat_computation_is_identical() -> None:
    store = InMemoryListStore()
    seed_store(
        store,
        "u1",
        {"a": [make_song(i, artist=f"A{i % 3}", album=f"M{i % 2}") for i in range(12)]},
    )
    agg = StatsAggregator(store)

    assert agg.compute_stats("u1") == agg.compute_stats("u1")


def test_custom_top_n() -> None:
    store = InMemoryListStore()
    seed_store(store, "u1", {"a": [make_song(i, artist=f"A{i}") for i in range(4)]})

    stats = compute_stats(store, "u1", top_n=2)

    assert len(stats["top_artists"]) == 2
    assert stats["total_songs"] == 4


def test_other_users_lists_are_ignored() -> None:
    store = InMemoryListStore()
    seed_store(store, "u1", {"a": [make_song(1, artist="Mine")]})
    seed_store(store, "u2", {"b": [make_song(2, artist="Theirs"), make_song(3)]})

    stats = StatsAggregator(store).compute_stats("u1")

    assert stats["total_songs"] == 1
    assert stats["top_artists"] == [{"name": "Mine", "count": 1}]
