# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level corsmisc facade for single-target and batch probing."""

from collections.abc import Iterable
from contextlib import suppress

from .config import ProbeSettings, load_probe_settings
from .http.client import ProbeClient, create_default_probe_client
from .models import Result
from .scan.engine import TargetEvaluator
from .scan.runner import ClientFactory, Dispatcher, ResultCallback


class Corsmisc:
    """
    Convenience wrapper that wires settings, a ProbeClient and the evaluator together.

    `probe()` reuses one client owned by the facade; `run()` hands each worker a fresh
    client from `client_factory` so no client is shared across threads.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        *,
        client: ProbeClient | None = None,
        client_factory: ClientFactory = create_default_probe_client,
    ):
        self.settings = settings or load_probe_settings()
        self.client_factory = client_factory
        self.client = client or client_factory(self.settings)
        self.evaluator = TargetEvaluator(self.client, self.settings)
        self.dispatcher = Dispatcher(self.settings, client_factory)

    def probe(self, url: str) -> Result | None:
        """Evaluate one target. Raises TargetParseError when the URL cannot be parsed."""
        return self.evaluator.evaluate(url)

    def run(self, urls: Iterable[str], on_result: ResultCallback | None = None) -> list[Result]:
        """Evaluate many targets concurrently; unparseable URLs are logged and skipped."""
        return self.dispatcher.run(urls, on_result=on_result)

    def close(self) -> None:
        with suppress(Exception):
            self.client.close()

    def __enter__(self) -> "Corsmisc":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()
