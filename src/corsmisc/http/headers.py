# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110), but header *values* are compared
byte-for-byte when deciding whether an origin was reflected. Names are normalized here;
values are never stripped or re-cased.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

ACAO_HEADER = "access-control-allow-origin"
ACAC_HEADER = "access-control-allow-credentials"


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """
    Best-effort coercion of "dict-like" header containers into a Mapping.

    Supports plain dicts, httpx.Headers and iterable-of-pairs.
    """
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        try:
            return dict(items())
        except (TypeError, ValueError):
            pass

    try:
        return dict(headers)
    except (TypeError, ValueError):
        return None


def normalize_headers(headers: Any) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return {}
    out: dict[str, str] = {}
    for key, value in coerced.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def raw_header_value(headers: Mapping[object, object] | None, name: str) -> str | None:
    """
    Return a header value using case-insensitive key matching, or None when absent.

    The value is returned untouched: no whitespace stripping, no case folding.
    """
    if not headers or not name:
        return None

    lower = str(name).lower()
    for key in (name, lower, lower.title()):
        if key in headers:
            value = headers.get(key)
            return None if value is None else str(value)

    for key, value in headers.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return None if value is None else str(value)

    return None


def parse_header_line(line: str) -> tuple[str, str]:
    """Split a `Name: Value` header line, raising ValueError when it has no name."""
    name, sep, value = str(line or "").partition(":")
    name = name.strip()
    if not sep or not name:
        raise ValueError(f"invalid header {line!r}, expected 'Name: Value'")
    return name, value.strip()


__all__ = ["ACAC_HEADER", "ACAO_HEADER", "normalize_headers", "parse_header_line", "raw_header_value"]
