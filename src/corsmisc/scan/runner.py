# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dispatcher: a fixed pool of worker threads fed from one bounded queue."""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable, Iterable
from contextlib import suppress

from ..config import ProbeSettings, load_probe_settings
from ..errors import TargetParseError
from ..http.client import ProbeClient, create_default_probe_client
from ..models import Result
from .engine import TargetEvaluator

logger = logging.getLogger(__name__)

ClientFactory = Callable[[ProbeSettings], ProbeClient]
ResultCallback = Callable[[Result], None]

_STOP = object()


class Dispatcher:
    """
    Distributes target URLs over `settings.concurrency` workers.

    Every worker owns its ProbeClient and keeps its Results in a private list; the lists
    are concatenated once all workers have joined. Targets finish in no particular order.
    A target is probed once per run: repeated input lines share its single Result.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        client_factory: ClientFactory = create_default_probe_client,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings or load_probe_settings()
        self.client_factory = client_factory
        self._sleep = sleep
        self._callback_lock = threading.Lock()

    def run(self, urls: Iterable[str], on_result: ResultCallback | None = None) -> list[Result]:
        """
        Probe every URL from `urls` and return the Results of targets with reflections.

        Errors raised while iterating `urls` stop the run: workers finish what is already
        queued, then the error is re-raised.
        """
        worker_count = self.settings.concurrency
        work: queue.Queue[object] = queue.Queue(maxsize=worker_count)
        clients = [self.client_factory(self.settings) for _ in range(worker_count)]
        buckets: list[list[Result]] = [[] for _ in range(worker_count)]
        threads = [
            threading.Thread(
                target=self._work,
                args=(work, TargetEvaluator(client, self.settings, sleep=self._sleep), bucket, on_result),
                name=f"corsmisc-worker-{index}",
                daemon=True,
            )
            for index, (client, bucket) in enumerate(zip(clients, buckets))
        ]

        for thread in threads:
            thread.start()
        seen: set[str] = set()
        try:
            for url in urls:
                key = str(url).strip()
                if key in seen:
                    logger.debug("Skipping repeated target %s", key)
                    continue
                seen.add(key)
                work.put(url)
        finally:
            for _ in threads:
                work.put(_STOP)
            for thread in threads:
                thread.join()
            for client in clients:
                with suppress(Exception):
                    client.close()

        return [result for bucket in buckets for result in bucket]

    def _work(
        self,
        work: queue.Queue[object],
        evaluator: TargetEvaluator,
        bucket: list[Result],
        on_result: ResultCallback | None,
    ) -> None:
        while True:
            item = work.get()
            if item is _STOP:
                return
            url = str(item)
            try:
                result = evaluator.evaluate(url)
            except TargetParseError as exc:
                logger.info("Skipping target: %s", exc)
                continue
            except Exception as exc:  # noqa: BLE001
                logger.exception("Evaluation of %s failed: %s", url, exc)
                continue
            if result is None:
                continue
            bucket.append(result)
            if on_result is not None:
                self._notify(on_result, result)

    def _notify(self, on_result: ResultCallback, result: Result) -> None:
        with self._callback_lock:
            try:
                on_result(result)
            except Exception as exc:  # noqa: BLE001
                logger.exception("Result callback failed for %s: %s", result.url, exc)


__all__ = ["ClientFactory", "Dispatcher", "ResultCallback"]
