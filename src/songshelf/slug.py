from __future__ import annotations

import re
import unicodedata

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w\-]+", re.ASCII)
_DASH_RUN = re.compile(r"\-\-+")


def slugify(text: str) -> str:
    """Build a URL slug from a list name.

    Accents are stripped, whitespace becomes ``-``, anything that is not a
    word character or ``-`` is dropped, and repeated dashes collapse.
    """
    decomposed = unicodedata.normalize("NFD", str(text))
    plain = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    out = plain.lower().strip()
    out = _WHITESPACE.sub("-", out)
    out = _NON_WORD.sub("", out)
    return _DASH_RUN.sub("-", out)


__all__ = ["slugify"]
