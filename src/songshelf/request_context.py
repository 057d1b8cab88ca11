from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable
from contextvars import ContextVar

from fastapi import FastAPI
from starlette.requests import Request
from starlette.responses import Response

# Request ID shared by log records and error bodies for the current request.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_CallNext = Callable[[Request], Awaitable[Response]]


def _decode_request_id(request: Request) -> str:
    """Use the caller's X-Request-ID header or generate a new UUID."""
    rid = request.headers.get("x-request-id")
    if rid is None or rid.strip() == "":
        return str(uuid.uuid4())
    return rid.strip()


def install_request_id_middleware(app: FastAPI) -> None:
    """Bind a request ID for each HTTP request and echo it in the response."""

    @app.middleware("http")
    async def _middleware(request: Request, call_next: _CallNext) -> Response:
        rid = _decode_request_id(request)
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
            response.headers["x-request-id"] = rid
            return response
        finally:
            request_id_var.reset(token)


__all__ = ["install_request_id_middleware", "request_id_var"]
