# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe client exports."""

from .models import Headers, ProbeRequest, ProbeResponse
from .headers import normalize_headers, parse_header_line, raw_header_value
from .client import ProbeClient, create_default_probe_client
from .adapters import StubProbeClient, reflecting_responder
from .httpx_client import HttpxProbeClient, build_httpx_client
from .url import parse_target

__all__ = [
    "Headers",
    "HttpxProbeClient",
    "ProbeClient",
    "ProbeRequest",
    "ProbeResponse",
    "StubProbeClient",
    "build_httpx_client",
    "create_default_probe_client",
    "normalize_headers",
    "parse_header_line",
    "parse_target",
    "raw_header_value",
    "reflecting_responder",
]
