# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed ProbeClient implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import ProbeSettings, load_probe_settings
from ..errors import categorize_exception
from .client import ProbeClient
from .models import ProbeRequest, ProbeResponse

logger = logging.getLogger(__name__)


def build_httpx_client(settings: ProbeSettings, **kwargs) -> httpx.Client:
    """
    Build the underlying httpx.Client for probing.

    Redirects are never followed: the first response's ACAO header is the one being judged,
    and a redirect could hand that decision to a different host. TLS verification is off
    unless explicitly enabled so self-signed and misconfigured hosts can still be probed.
    """
    return httpx.Client(
        follow_redirects=False,
        timeout=settings.timeout,
        verify=settings.verify_tls,
        proxy=settings.proxy or None,
        **kwargs,
    )


class HttpxProbeClient(ProbeClient):
    """Synchronous httpx client wrapper. One instance per worker thread."""

    def __init__(self, settings: ProbeSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_probe_settings()
        self._client = client or build_httpx_client(self.settings)

    def send(self, request: ProbeRequest) -> ProbeResponse:
        headers = request.build_headers(self.settings.user_agent)

        try:
            # Stream so the body is closed unread; only headers matter.
            with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                timeout=self.settings.timeout,
                follow_redirects=False,
            ) as resp:
                # A repeated header counts by its first value only.
                first_values = {name: resp.headers.get_list(name)[0] for name in resp.headers.keys()}
                return ProbeResponse(
                    ok=True,
                    status_code=resp.status_code,
                    headers=first_values,
                    url=str(resp.url),
                )
        except Exception as exc:  # noqa: BLE001
            category = categorize_exception(exc)
            logger.debug("Probe %s %s (Origin: %s) failed: %s", request.method, request.url, request.origin, exc)
            return ProbeResponse(
                ok=False,
                error_message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
                error_category=category,
            )

    def close(self) -> None:
        self._client.close()
