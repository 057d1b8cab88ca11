from __future__ import annotations

import logging

from songshelf.json_utils import load_json_str
from songshelf.logging import JsonFormatter, TextFormatter, get_logger, setup_logging
from songshelf.request_context import request_id_var


def _record(msg: str, *, level: int = logging.INFO, **extra: str | int) -> logging.LogRecord:
    record = logging.LogRecord(
        name="songshelf.test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_basic_fields() -> None:
    formatter = JsonFormatter(static_fields={"service": "songshelf"}, extra_field_names=[])
    parsed = load_json_str(formatter.format(_record("stats_computed")))
    assert type(parsed) is dict

    assert parsed["level"] == "INFO"
    assert parsed["logger"] == "songshelf.test"
    assert parsed["message"] == "stats_computed"
    assert parsed["service"] == "songshelf"
    assert "timestamp" in parsed
    assert "request_id" not in parsed


def test_json_formatter_emits_standard_and_extra_fields() -> None:
    formatter = JsonFormatter(static_fields={}, extra_field_names=["custom"])
    record = _record("stats_computed", user_id="u1", total_songs=3, custom="x")
    parsed = load_json_str(formatter.format(record))
    assert type(parsed) is dict

    assert parsed["user_id"] == "u1"
    assert parsed["total_songs"] == 3
    assert parsed["custom"] == "x"
    assert "list_id" not in parsed


def test_json_formatter_includes_bound_request_id() -> None:
    formatter = JsonFormatter(static_fields={}, extra_field_names=[])
    token = request_id_var.set("req-42")
    try:
        parsed = load_json_str(formatter.format(_record("hello")))
    finally:
        request_id_var.reset(token)
    assert type(parsed) is dict
    assert parsed["request_id"] == "req-42"


def test_text_formatter_layout() -> None:
    formatter = TextFormatter(extra_fields=[])
    line = formatter.format(_record("list_created", level=logging.WARNING, list_id="l1"))

    assert "[WARNING]" in line
    assert "[songshelf.test]" in line
    assert "list_id=l1" in line
    assert line.endswith("list_created")


def test_setup_logging_replaces_root_handlers() -> None:
    root = setup_logging(
        level="DEBUG",
        format_mode="text",
        service_name="songshelf",
        instance_id="test-1",
        extra_fields=None,
    )
    setup_logging(
        level="WARNING",
        format_mode="json",
        service_name="songshelf",
        instance_id="test-1",
        extra_fields=None,
    )

    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JsonFormatter)
    assert root.level == logging.WARNING
    assert get_logger("songshelf.x").name == "songshelf.x"
