# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Target evaluator: send every candidate origin to one target and collect reflections."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from ..config import ProbeSettings, load_probe_settings
from ..errors import categorize_exception, error_category_to_reason
from ..http.client import ProbeClient
from ..http.models import ProbeRequest, ProbeResponse
from ..http.url import parse_target
from ..models import Result, TargetURL
from .origins import generate_origins

logger = logging.getLogger(__name__)


def is_reflected(origin: str, response: ProbeResponse) -> bool:
    """A candidate is a hit only when ACAO is byte-identical to the Origin that was sent."""
    if not response.ok:
        return False
    acao = response.acao
    return acao is not None and acao == origin


class TargetEvaluator:
    """
    Drives the candidate generator and a ProbeClient for one target at a time.

    Transport failures skip the candidate and never abort the target. Unless
    `settings.probe_all` is set, evaluation stops before the next request once a
    reflection has been recorded; the first candidate is therefore always sent.
    """

    def __init__(
        self,
        client: ProbeClient,
        settings: ProbeSettings | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.settings = settings or load_probe_settings()
        self._sleep = sleep

    def evaluate(self, url: str) -> Result | None:
        """Parse and probe a raw URL. Raises TargetParseError for unparseable input."""
        return self.evaluate_target(parse_target(url))

    def evaluate_target(self, target: TargetURL) -> Result | None:
        reflected: list[str] = []
        acac: str | None = None
        sent = 0
        failed = 0

        for origin in generate_origins(target):
            if self._should_stop(reflected):
                break

            self._pause()
            response = self._send(target, origin)
            sent += 1

            if not response.ok:
                failed += 1
                logger.debug(
                    "%s: Origin %r skipped: %s (%s)",
                    target.raw,
                    origin,
                    response.error_message,
                    error_category_to_reason(response.error_category),
                )
                continue

            if is_reflected(origin, response):
                reflected.append(origin)
                # Most recent hit wins; taken from the same response as the match.
                acac = response.acac
                logger.debug("%s: Origin %r reflected (ACAC=%r)", target.raw, origin, acac)

        if failed:
            logger.info("%s: %d of %d probes failed at the transport level", target.raw, failed, sent)

        if not reflected:
            return None
        return Result(url=target.raw, acao=tuple(reflected), acac=acac)

    def _should_stop(self, reflected: list[str]) -> bool:
        return not self.settings.probe_all and len(reflected) > 0

    def _pause(self) -> None:
        delay = self.settings.delay_seconds
        if delay > 0:
            self._sleep(delay)

    def _send(self, target: TargetURL, origin: str) -> ProbeResponse:
        request = ProbeRequest(
            url=target.raw,
            origin=origin,
            method=self.settings.method,
            headers=self.settings.headers or None,
        )
        try:
            return self.client.send(request)
        except Exception as exc:  # noqa: BLE001
            return ProbeResponse(
                ok=False,
                error_message=str(exc),
                error_type=exc.__class__.__name__,
                error_category=categorize_exception(exc),
            )


__all__ = ["TargetEvaluator", "is_reflected"]
