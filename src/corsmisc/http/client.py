# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe client abstraction and factory."""

from typing import Protocol

from ..config import ProbeSettings, load_probe_settings
from .models import ProbeRequest, ProbeResponse


class ProbeClient(Protocol):
    """Minimal protocol for issuing CORS probe requests."""

    def send(self, request: ProbeRequest) -> ProbeResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_probe_client(settings: ProbeSettings | None = None) -> ProbeClient:
    """Factory for the default httpx-backed client."""
    from .httpx_client import HttpxProbeClient

    return HttpxProbeClient(settings or load_probe_settings())
