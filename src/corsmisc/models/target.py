# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Parsed target URL model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TargetURL:
    """
    A target split into the parts candidate origins are derived from.

    `domain` is the registrable label without its public suffix and `tld` is the suffix
    itself: `https://www.example.co.uk/x` has domain `example` and tld `co.uk`.
    `raw` is the input as supplied, stripped of surrounding whitespace; requests are sent
    to it unmodified and results are keyed by it.
    """

    scheme: str
    domain: str
    tld: str
    raw: str
    subdomain: str = ""

    def __str__(self) -> str:
        return self.raw
