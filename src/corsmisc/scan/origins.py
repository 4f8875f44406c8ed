# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Candidate Origin values for a target.

Each candidate probes one class of allow-list mistake. Order matters: under
short-circuit mode the first reflected candidate is the one reported, so the
cheapest, most general bypasses come first.
"""

from __future__ import annotations

from ..models.target import TargetURL

SENTINEL_DOMAIN = "corsmisc.com"

# Script-hosting and code-playground origins that end up allow-listed by mistake.
THIRD_PARTY_ORIGINS: tuple[str, ...] = (
    "https://whatever.github.io",
    "http://jsbin.com",
    "https://codepen.io",
    "https://jsfiddle.net",
    "http://www.webdevout.net",
    "https://repl.it",
)

# Shell/regex/URL metacharacters appended after the target host; `%60` and `%0b` are
# percent-encoded backtick and vertical tab.
SPECIAL_CHARACTERS: tuple[str, ...] = (
    "_",
    "-",
    "+",
    "$",
    "{",
    "}",
    "^",
    "%60",
    "!",
    "~",
    "`",
    ";",
    "|",
    "&",
    "(",
    ")",
    "*",
    "'",
    '"',
    "=",
    "%0b",
)


def structural_origins(target: TargetURL) -> list[str]:
    """Origins derived from the target's scheme, domain and TLD."""
    scheme, domain, tld = target.scheme, target.domain, target.tld
    return [
        # wildcard
        "*",
        # allow-listed null origin (sandboxed iframes, file://)
        "null",
        # plain reflection of an arbitrary origin
        f"{scheme}://{SENTINEL_DOMAIN}",
        # same name, another TLD
        f"{scheme}://{domain}.anothertld",
        # target as a subdomain prefix of an attacker domain
        f"{scheme}://{domain}.{SENTINEL_DOMAIN}",
        f"{scheme}://{domain}.{tld}.{SENTINEL_DOMAIN}",
        # attacker label as a suffix match
        f"{scheme}://corsmisc.{domain}.{tld}",
        f"{scheme}://{SENTINEL_DOMAIN}.{domain}.{tld}",
        # unescaped dot in a regex allow-list
        f"{scheme}://corsmisc{domain}.{tld}",
    ]


def special_character_origins(target: TargetURL) -> list[str]:
    """Origins that smuggle a metacharacter between the target host and an attacker domain."""
    return [
        f"{target.scheme}://{target.domain}.{target.tld}{char}.{SENTINEL_DOMAIN}"
        for char in SPECIAL_CHARACTERS
    ]


def generate_origins(target: TargetURL) -> list[str]:
    """
    Return the full, ordered candidate list for a target.

    The result depends only on `target`; no deduplication is applied.
    """
    origins = structural_origins(target)
    origins.extend(THIRD_PARTY_ORIGINS)
    origins.extend(special_character_origins(target))
    return origins


__all__ = [
    "SENTINEL_DOMAIN",
    "SPECIAL_CHARACTERS",
    "THIRD_PARTY_ORIGINS",
    "generate_origins",
    "special_character_origins",
    "structural_origins",
]
