"""Rendering of derived views into ordered, serialized payloads."""

import json
import re
from collections.abc import Mapping

from pydantic import BaseModel

from netview.core.errors import MalformedEncoding

_NUMERIC = re.compile(r"[0-9]+")
_TRAILING_NUMBER = re.compile(r"(.*?)([0-9]+)")


def _digits_key(digits: str) -> tuple:
    """Compare digit strings by value without int(); no length limit."""
    significant = digits.lstrip("0")
    return (len(significant), significant, digits)


def ordering_key(identifier: str) -> tuple:
    """Sort key for top-level view keys.

    Numeric identifiers come first, ascending by value. Names ending in a
    number (`Ethernet8`) follow, by stem then number. Anything else sorts
    last, lexicographically.
    """
    if _NUMERIC.fullmatch(identifier):
        return (0, "", _digits_key(identifier))
    match = _TRAILING_NUMBER.fullmatch(identifier)
    if match:
        return (1, match.group(1), _digits_key(match.group(2)))
    return (2, identifier, ())


def render_view(records: Mapping[str, BaseModel]) -> dict[str, dict[str, str]]:
    """Order records by key and dump each one in its declared field order."""
    return {
        key: records[key].model_dump(by_alias=True)
        for key in sorted(records, key=ordering_key)
    }


def serialize_view(view: Mapping[str, Mapping[str, str]]) -> bytes:
    """Compact UTF-8 JSON. Identical input gives identical bytes; `{}` when empty."""
    try:
        return json.dumps(
            view,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise MalformedEncoding(f"View could not be serialized: {exc}") from exc
