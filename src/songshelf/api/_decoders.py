from __future__ import annotations

from typing import TypedDict

from songshelf.errors import AppError, ErrorCode
from songshelf.json_utils import InvalidJsonError, JSONValue, load_json_bytes
from songshelf.models import Song


class ListBody(TypedDict):
    name: str
    description: str


def _invalid(message: str) -> AppError[ErrorCode]:
    return AppError(code=ErrorCode.INVALID_INPUT, message=message, http_status=400)


def load_json_object(raw: bytes) -> dict[str, JSONValue]:
    """Parse a request body that must be a JSON object."""
    try:
        doc = load_json_bytes(raw)
    except (InvalidJsonError, UnicodeDecodeError) as exc:
        raise _invalid("Invalid JSON body") from exc
    if not isinstance(doc, dict):
        raise _invalid("object required")
    return doc


def _required_str(d: dict[str, JSONValue], field: str) -> str:
    val = d.get(field)
    if val is None:
        raise _invalid(f"{field} is required")
    if not isinstance(val, str):
        raise _invalid(f"{field} must be a string")
    return val


def _optional_str(d: dict[str, JSONValue], field: str, default: str | None) -> str | None:
    val = d.get(field)
    if val is None:
        return default
    if not isinstance(val, str):
        raise _invalid(f"{field} must be a string")
    return val


def decode_list_body(d: dict[str, JSONValue], *, name_required: bool) -> ListBody:
    name = _required_str(d, "name") if name_required else _optional_str(d, "name", "")
    description = _optional_str(d, "description", "")
    return {"name": name or "", "description": description or ""}


def decode_song_body(d: dict[str, JSONValue]) -> Song:
    """Decode a song snapshot; numeric catalog ids are accepted and stringified."""
    raw_id = d.get("id")
    if isinstance(raw_id, bool) or not isinstance(raw_id, (int, str)) or raw_id == "":
        raise _invalid("id must be a non-empty string or integer")
    return {
        "id": str(raw_id),
        "title": _required_str(d, "title"),
        "artist": _optional_str(d, "artist", None),
        "album": _optional_str(d, "album", None),
        "artwork": _optional_str(d, "artwork", "") or "",
        "preview_url": _optional_str(d, "preview_url", "") or "",
    }


__all__ = ["ListBody", "decode_list_body", "decode_song_body", "load_json_object"]
