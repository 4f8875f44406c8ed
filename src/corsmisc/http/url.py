# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Target URL parsing backed by the public suffix list."""

from __future__ import annotations

from functools import lru_cache
from urllib.parse import urlsplit

import tldextract

from ..errors import TargetParseError
from ..models.target import TargetURL

SUPPORTED_SCHEMES = frozenset({"http", "https"})


@lru_cache(maxsize=1)
def _extractor() -> tldextract.TLDExtract:
    # Bundled suffix snapshot only: parsing must never touch the network or the disk cache.
    return tldextract.TLDExtract(suffix_list_urls=(), cache_dir=None)


def parse_target(raw: str) -> TargetURL:
    """Split a raw target URL into scheme, registrable domain and TLD."""
    text = str(raw or "").strip()
    if not text:
        raise TargetParseError(text, "empty URL")

    try:
        parts = urlsplit(text)
        hostname = parts.hostname
    except ValueError as exc:
        raise TargetParseError(text, str(exc)) from exc

    scheme = parts.scheme.lower()
    if not scheme:
        raise TargetParseError(text, "missing scheme (expected http:// or https://)")
    if scheme not in SUPPORTED_SCHEMES:
        raise TargetParseError(text, f"unsupported scheme {scheme!r}")
    if not hostname:
        raise TargetParseError(text, "missing host")

    extracted = _extractor()(hostname)
    if not extracted.domain or not extracted.suffix:
        raise TargetParseError(text, f"host {hostname!r} has no registrable domain")

    return TargetURL(
        scheme=scheme,
        domain=extracted.domain,
        tld=extracted.suffix,
        subdomain=extracted.subdomain,
        raw=text,
    )


__all__ = ["SUPPORTED_SCHEMES", "parse_target"]
