from __future__ import annotations

from songshelf import slugify


def test_slugify_strips_accents_and_punctuation() -> None:
    assert slugify("Café  del Mar!!") == "cafe-del-mar"


def test_slugify_collapses_dashes_and_trims() -> None:
    assert slugify("  Rock -- Roll  ") == "rock-roll"
    assert slugify("Summer 2024 Mix") == "summer-2024-mix"


def test_slugify_drops_non_ascii_word_chars() -> None:
    assert slugify("Beyoncé's Best") == "beyonces-best"
    assert slugify("日本 pop") == "-pop"


def test_slugify_keeps_underscores() -> None:
    assert slugify("lo_fi beats") == "lo_fi-beats"
