"""Structured encoding of IdMaps.

Layout:
    {"cursor": <int>, "dict": {"<decimal key>": <encoded value>, ...}}

Decoding trusts the data only as far as it can check it. The stored
cursor is raised to at least the entry count and one past the largest
key, so a hand-edited or stale document still yields a map whose keys
are all below its cursor. Keys that are not decimal integers are dropped.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any, Callable, TypeVar

from idmap.core import IdMap

V = TypeVar("V")

logger = logging.getLogger("idmap.codec")

_DECIMAL_KEY = re.compile(r"-?[0-9]+")


class DecodeError(ValueError):
    """Raised when a document cannot be turned into an IdMap."""


def encode(m: IdMap[V], encode_value: Callable[[V], Any] | None = None) -> dict[str, Any]:
    """Turn m into a JSON-ready dict. encode_value defaults to identity."""
    if encode_value is None:
        encoded = {str(key): value for key, value in m.to_list()}
    else:
        encoded = {str(key): encode_value(value) for key, value in m.to_list()}
    return {"cursor": m.cursor, "dict": encoded}


def _parse_key(raw: object) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and _DECIMAL_KEY.fullmatch(raw):
        return int(raw)
    return None


def decode(data: Any, decode_value: Callable[[Any], V] | None = None) -> IdMap[V]:
    """Rebuild an IdMap from the output of encode().

    Raises DecodeError when "cursor" is not an int, when "dict" is not a
    mapping, or when decode_value raises for any entry. Entries whose key
    is not an integer are dropped before their value is looked at, so
    decode_value never sees them and cannot fail on them.
    """
    if not isinstance(data, Mapping):
        raise DecodeError(f"expected an object, got {type(data).__name__}")

    declared = data.get("cursor")
    if isinstance(declared, bool) or not isinstance(declared, int):
        raise DecodeError(f'"cursor" must be an integer, got {declared!r}')

    raw_entries = data.get("dict")
    if not isinstance(raw_entries, Mapping):
        raise DecodeError(f'"dict" must be an object, got {type(raw_entries).__name__}')

    entries: dict[int, V] = {}
    for raw_key, raw_value in raw_entries.items():
        key = _parse_key(raw_key)
        if key is None:
            logger.debug("Dropping non-integer key %r", raw_key)
            continue
        if decode_value is None:
            entries[key] = raw_value
            continue
        try:
            entries[key] = decode_value(raw_value)
        except Exception as exc:
            raise DecodeError(f"bad value at key {raw_key!r}: {exc}") from exc

    cursor = max(declared, len(entries), max(entries, default=-1) + 1)
    if cursor != declared:
        logger.debug("Repaired cursor %d -> %d", declared, cursor)
    return IdMap._build(dict(sorted(entries.items())), cursor)


def dumps(
    m: IdMap[V],
    encode_value: Callable[[V], Any] | None = None,
    **json_kwargs: Any,
) -> str:
    """encode() then json.dumps(). Extra keyword args go to json.dumps."""
    return json.dumps(encode(m, encode_value), **json_kwargs)


def loads(text: str | bytes, decode_value: Callable[[Any], V] | None = None) -> IdMap[V]:
    """json.loads() then decode(). Malformed JSON or bad UTF-8 raises DecodeError."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc
    return decode(data, decode_value)
