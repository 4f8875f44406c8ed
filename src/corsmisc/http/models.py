# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe request/response data models."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import ErrorCategory
from .headers import ACAC_HEADER, ACAO_HEADER, normalize_headers, raw_header_value

Headers = dict[str, str]


@dataclass(frozen=True)
class ProbeRequest:
    """A single CORS probe: the target URL is never rewritten, only the Origin header varies."""

    url: str
    origin: str
    method: str = "GET"
    headers: Headers | None = None

    def build_headers(self, user_agent: str | None = None) -> Headers:
        """Merge extra headers with the probe's Origin; Origin always wins."""
        headers: Headers = {}
        if user_agent:
            headers["User-Agent"] = user_agent
        for key, value in (self.headers or {}).items():
            if str(key).lower() == "origin":
                continue
            headers[str(key)] = str(value)
        headers["Origin"] = self.origin
        return headers


@dataclass
class ProbeResponse:
    """
    Subset of an HTTP response relevant to CORS evaluation.

    Status and body are irrelevant to classification; only the ACAO/ACAC header values are
    consulted. Transport failures are represented with `ok=False` instead of exceptions.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    error_category: ErrorCategory = ErrorCategory.NONE

    def __post_init__(self) -> None:
        self.headers = normalize_headers(self.headers)

    @property
    def acao(self) -> str | None:
        """Access-Control-Allow-Origin value exactly as received, or None when absent."""
        return raw_header_value(self.headers, ACAO_HEADER)

    @property
    def acac(self) -> str | None:
        """Access-Control-Allow-Credentials value exactly as received, or None when absent."""
        return raw_header_value(self.headers, ACAC_HEADER)
