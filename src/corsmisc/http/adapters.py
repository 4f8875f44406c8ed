# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Programmable ProbeClient implementations for tests and offline runs."""

from __future__ import annotations

from collections.abc import Callable

from .client import ProbeClient
from .models import ProbeRequest, ProbeResponse

Responder = Callable[[ProbeRequest], ProbeResponse]


class StubProbeClient(ProbeClient):
    """
    Deterministic, programmable ProbeClient.

    Responses are looked up by the Origin header of the request; a `responder` callable takes
    precedence when supplied. Every request is recorded in `requests`.
    """

    def __init__(
        self,
        responses: dict[str, ProbeResponse] | None = None,
        *,
        responder: Responder | None = None,
        default: ProbeResponse | None = None,
    ):
        self._responses = dict(responses or {})
        self._responder = responder
        self._default = default
        self.requests: list[ProbeRequest] = []
        self.closed = False

    def add(self, origin: str, response: ProbeResponse) -> None:
        self._responses[origin] = response

    def send(self, request: ProbeRequest) -> ProbeResponse:
        self.requests.append(request)
        if self._responder is not None:
            return self._responder(request)
        if request.origin in self._responses:
            return self._responses[request.origin]
        if self._default is not None:
            return self._default
        return ProbeResponse(ok=True, status_code=200)

    def close(self) -> None:
        self.closed = True


def reflecting_responder(*, credentials: str | None = "true", only: Callable[[str], bool] | None = None) -> Responder:
    """Build a responder that echoes the Origin header back, like a permissive server would."""

    def _respond(request: ProbeRequest) -> ProbeResponse:
        headers: dict[str, str] = {}
        if only is None or only(request.origin):
            headers["Access-Control-Allow-Origin"] = request.origin
            if credentials is not None:
                headers["Access-Control-Allow-Credentials"] = credentials
        return ProbeResponse(ok=True, status_code=200, headers=headers, url=request.url)

    return _respond


__all__ = ["Responder", "StubProbeClient", "reflecting_responder"]
