from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from starlette.requests import Request

from songshelf.logging import get_logger
from songshelf.request_context import request_id_var


class ErrorCodeBase(str, Enum):
    """Base class for error codes.

    Each member is both an Enum and a str, so the code serializes as its value.
    """

    value: str


class ErrorCode(ErrorCodeBase):
    """Error codes shared by every songshelf surface.

    Convention: UPPERCASE_WITH_UNDERSCORES, one code per precise failure.
    """

    # User/Client Errors (4xx)
    INVALID_INPUT = "INVALID_INPUT"  # 400 - validation failed
    INVALID_LIST_NAME = "INVALID_LIST_NAME"  # 400 - blank list name
    USER_NOT_FOUND = "USER_NOT_FOUND"  # 404 - user has no account data
    LIST_NOT_FOUND = "LIST_NOT_FOUND"  # 404 - list id unknown for user
    STATS_CANCELLED = "STATS_CANCELLED"  # 499 - caller withdrew interest

    # System Errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"  # 500 - unexpected server error
    STATS_FETCH_FAILED = "STATS_FETCH_FAILED"  # 502 - list store read failed
    SEARCH_FAILED = "SEARCH_FAILED"  # 502 - catalog lookup failed


_ERROR_CODE_STATUS: dict[ErrorCode, int] = {
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.INVALID_LIST_NAME: 400,
    ErrorCode.USER_NOT_FOUND: 404,
    ErrorCode.LIST_NOT_FOUND: 404,
    ErrorCode.STATS_CANCELLED: 499,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.STATS_FETCH_FAILED: 502,
    ErrorCode.SEARCH_FAILED: 502,
}

ErrorCodeType = TypeVar("ErrorCodeType", bound=ErrorCodeBase)


def _default_status_for(code: ErrorCodeBase) -> int:
    if isinstance(code, ErrorCode):
        return _ERROR_CODE_STATUS.get(code, 500)
    return 500


class AppError(Exception, Generic[ErrorCodeType]):
    """Application error with a machine-readable code and HTTP status.

    Attributes:
        code: Error code enum value
        message: Human-readable error message
        http_status: HTTP status code to return

    Example:
        >>> raise AppError(code=ErrorCode.INVALID_INPUT, message="name required")
    """

    def __init__(self, code: ErrorCodeType, message: str, http_status: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status if http_status is not None else _default_status_for(code)


class NotFoundError(AppError[ErrorCode]):
    """A user or list id does not resolve in the list store."""

    def __init__(self, message: str, *, code: ErrorCode = ErrorCode.USER_NOT_FOUND) -> None:
        super().__init__(code=code, message=message)


class FetchError(AppError[ErrorCode]):
    """Reading lists or songs failed; the whole computation was abandoned.

    The underlying exception is kept on ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, message: str, *, cause: BaseException) -> None:
        super().__init__(code=ErrorCode.STATS_FETCH_FAILED, message=message)
        self.cause = cause


class Cancelled(AppError[ErrorCode]):
    """The caller cancelled the computation before it finished."""

    def __init__(self, message: str = "Stats computation cancelled") -> None:
        super().__init__(code=ErrorCode.STATS_CANCELLED, message=message)


def error_body(code: str, message: str, request_id: str) -> dict[str, str]:
    """Standard error payload for songshelf responses."""
    return {"code": code, "message": message, "request_id": request_id}


def install_exception_handlers(app: FastAPI, *, logger_name: str = "songshelf") -> None:
    """Register handlers that turn AppError and unhandled exceptions into JSON.

    Logging behavior:
    - User errors (4xx): INFO, no traceback
    - System errors (5xx): ERROR with traceback
    - Unhandled exceptions: ERROR with traceback, generic 500 body
    """
    logger = get_logger(logger_name)

    async def _app_error_handler(request: Request, exc: Exception) -> JSONResponse:
        if not isinstance(exc, AppError):
            return await _unhandled_handler(request, exc)
        rid = request_id_var.get()
        code_value: str = exc.code
        fields = {
            "error_code": code_value,
            "error_message": exc.message,
            "path": request.url.path,
            "method": request.method,
        }
        if exc.http_status < 500:
            logger.info("user_error", extra=fields)
        else:
            logger.error("system_error", extra=fields, exc_info=True)
        return JSONResponse(
            content=error_body(code_value, exc.message, rid), status_code=exc.http_status
        )

    async def _unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
        rid = request_id_var.get()
        logger.error(
            "unhandled_exception",
            extra={
                "error_type": type(exc).__name__,
                "path": request.url.path,
                "method": request.method,
                "error_message": str(exc),
            },
            exc_info=True,
        )
        internal: str = ErrorCode.INTERNAL_ERROR
        return JSONResponse(
            content=error_body(internal, "Internal server error", rid), status_code=500
        )

    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(Exception, _unhandled_handler)


__all__ = [
    "AppError",
    "Cancelled",
    "ErrorCode",
    "ErrorCodeBase",
    "FetchError",
    "NotFoundError",
    "error_body",
    "install_exception_handlers",
]
