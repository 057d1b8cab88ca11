from __future__ import annotations

import logging
import os
import socket
import sys
import time
from typing import Literal

from songshelf.json_utils import JSONValue, dump_json_str
from songshelf.request_context import request_id_var

LogFormat = Literal["json", "text"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Structured fields emitted by songshelf modules through ``extra=``.
_STANDARD_FIELDS: tuple[str, ...] = (
    "user_id",
    "list_id",
    "list_count",
    "total_songs",
    "latency_ms",
    "error_code",
    "query",
    "result_count",
)


def _get_json_record_value(record: logging.LogRecord, field_name: str) -> JSONValue | None:
    raw_value: object = record.__dict__.get(field_name)
    if isinstance(raw_value, (dict, list, str, int, float, bool)):
        return raw_value
    return None


class JsonFormatter(logging.Formatter):
    """JSON formatter for service logs.

    Every record carries an ISO8601 UTC timestamp, level, logger and message,
    the static fields given at construction, the current request ID when one
    is bound, and any structured fields attached via ``extra=``.
    """

    def __init__(
        self,
        *,
        static_fields: dict[str, str],
        extra_field_names: list[str],
    ) -> None:
        super().__init__()
        self._static = static_fields
        self._extra_fields = extra_field_names

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, JSONValue] = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in self._static:
            payload[key] = self._static[key]

        rid = request_id_var.get()
        if rid != "":
            payload["request_id"] = rid

        for field_name in (*self._extra_fields, *_STANDARD_FIELDS):
            if field_name in payload:
                continue
            field_value = _get_json_record_value(record, field_name)
            if field_value is None:
                continue
            payload[field_name] = field_value

        if record.exc_info is not None:
            payload["exc_info"] = self.formatException(record.exc_info)

        return dump_json_str(payload, compact=False)


class TextFormatter(logging.Formatter):
    """Human-readable formatter: [timestamp] [LEVEL] [logger] [fields] message."""

    def __init__(self, *, extra_fields: list[str]) -> None:
        super().__init__()
        self._extra_fields = extra_fields

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        parts: list[str] = [
            f"[{timestamp}]",
            f"[{record.levelname}]",
            f"[{record.name}]",
        ]
        for field_name in (*self._extra_fields, *_STANDARD_FIELDS):
            if hasattr(record, field_name):
                attr_value: str | int | float | bool | None = getattr(record, field_name)
                parts.append(f"{field_name}={attr_value}")
        parts.append(record.getMessage())

        line = " ".join(parts)
        if record.exc_info is not None:
            line = line + "\n" + self.formatException(record.exc_info)
        return line


def _compute_instance_id() -> str:
    host = socket.gethostname().split(".")[0]
    return f"{host}-{os.getpid()}"


def _level_to_int(level: LogLevel) -> int:
    level_map: dict[LogLevel, int] = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map[level]


def setup_logging(
    *,
    level: LogLevel,
    format_mode: LogFormat,
    service_name: str,
    instance_id: str | None,
    extra_fields: list[str] | None,
) -> logging.Logger:
    """Configure the root logger with JSON or text output on stdout.

    Existing root handlers are cleared so repeated calls (app factory in
    tests) do not duplicate output.

    Args:
        level: Log level name.
        format_mode: ``"json"`` for production, ``"text"`` for local runs.
        service_name: Included in every JSON record.
        instance_id: Included in every JSON record; derived from host and PID if None.
        extra_fields: Additional record attributes to emit.

    Returns:
        The configured root logger.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(_level_to_int(level))

    static_fields: dict[str, str] = {
        "service": service_name,
        "instance_id": instance_id if instance_id is not None else _compute_instance_id(),
    }
    extra_field_names = extra_fields if extra_fields is not None else []

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    if format_mode == "json":
        handler.setFormatter(
            JsonFormatter(static_fields=static_fields, extra_field_names=extra_field_names)
        )
    else:
        handler.setFormatter(TextFormatter(extra_fields=extra_field_names))
    root.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = [
    "JsonFormatter",
    "LogFormat",
    "LogLevel",
    "TextFormatter",
    "get_logger",
    "setup_logging",
]
