from __future__ import annotations

from songshelf.api.main import create_app

app = create_app()

__all__ = ["app"]
