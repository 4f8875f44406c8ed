# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
import threading

import pytest

from corsmisc.config import ProbeSettings
from corsmisc.errors import TargetSourceError
from corsmisc.http.adapters import StubProbeClient, reflecting_responder
from corsmisc.scan.report import save_results
from corsmisc.scan.runner import Dispatcher


class RecordingFactory:
    """Hands out one StubProbeClient per worker and remembers them."""

    def __init__(self, only_urls_containing="vuln"):
        self.only = only_urls_containing
        self.clients = []
        self._lock = threading.Lock()

    def _responder(self, request):
        reflect = not self.only or self.only in request.url
        return reflecting_responder(only=lambda _origin: reflect)(request)

    def __call__(self, settings):
        client = StubProbeClient(responder=self._responder)
        with self._lock:
            self.clients.append(client)
        return client

    @property
    def requests(self):
        return [req for client in self.clients for req in client.requests]


def test_single_worker_processes_both_targets():
    factory = RecordingFactory()
    dispatcher = Dispatcher(ProbeSettings(concurrency=1, delay_ms=0), factory)
    results = dispatcher.run(["https://vuln.example.com", "https://safe.example.org"])
    assert len(factory.clients) == 1
    assert [result.url for result in results] == ["https://vuln.example.com"]
    assert results[0].acao == ("*",)
    targets = {req.url for req in factory.requests}
    assert targets == {"https://vuln.example.com", "https://safe.example.org"}


def test_each_worker_gets_its_own_client_and_clients_are_closed():
    factory = RecordingFactory()
    Dispatcher(ProbeSettings(concurrency=3, delay_ms=0), factory).run(["https://vuln.example.com"])
    assert len(factory.clients) == 3
    assert len({id(client) for client in factory.clients}) == 3
    assert all(client.closed for client in factory.clients)


def test_many_targets_across_workers_all_reported():
    urls = [f"https://vuln{index}.example.com" for index in range(12)]
    factory = RecordingFactory()
    results = Dispatcher(ProbeSettings(concurrency=4, delay_ms=0), factory).run(iter(urls))
    assert sorted(result.url for result in results) == sorted(urls)
    # Short-circuit: one request per target.
    assert len(factory.requests) == len(urls)


@pytest.mark.parametrize("concurrency", [1, 3])
def test_repeated_and_similar_targets_keep_one_result_each(tmp_path, concurrency):
    urls = [
        "https://vuln.example.com/api/",
        "https://vuln.example.com/api",
        "https://vuln.EXAMPLE.com/api#x",
        "https://vuln.example.com/api",
        " https://vuln.example.com/api/ ",
    ]
    factory = RecordingFactory()
    results = Dispatcher(ProbeSettings(concurrency=concurrency, delay_ms=0), factory).run(urls)

    keys = [result.url for result in results]
    assert sorted(keys) == sorted(
        ["https://vuln.example.com/api/", "https://vuln.example.com/api", "https://vuln.EXAMPLE.com/api#x"]
    )
    assert len(set(keys)) == len(keys)
    assert len(factory.requests) == 3

    saved = json.loads(save_results(tmp_path / "out.json", results).read_text())
    assert sorted(saved) == sorted(keys)


def test_parse_failures_are_skipped_without_stopping_others():
    factory = RecordingFactory()
    results = Dispatcher(ProbeSettings(concurrency=2, delay_ms=0), factory).run(
        ["not a url", "ftp://vuln.example.com", "https://vuln.example.net"]
    )
    assert [result.url for result in results] == ["https://vuln.example.net"]
    assert {req.url for req in factory.requests} == {"https://vuln.example.net"}


def test_on_result_callback_receives_each_result():
    seen = []
    factory = RecordingFactory()
    results = Dispatcher(ProbeSettings(concurrency=2, delay_ms=0), factory).run(
        ["https://vuln.a.com", "https://vuln.b.com", "https://safe.c.com"],
        on_result=seen.append,
    )
    assert sorted(r.url for r in seen) == sorted(r.url for r in results)
    assert len(seen) == 2


def test_callback_errors_do_not_lose_results():
    def broken(_result):
        raise RuntimeError("display failed")

    factory = RecordingFactory()
    results = Dispatcher(ProbeSettings(concurrency=1, delay_ms=0), factory).run(["https://vuln.a.com"], on_result=broken)
    assert len(results) == 1


def test_source_errors_stop_workers_and_propagate():
    def source():
        yield "https://vuln.example.com"
        raise TargetSourceError("cannot read targets")

    factory = RecordingFactory()
    with pytest.raises(TargetSourceError):
        Dispatcher(ProbeSettings(concurrency=2, delay_ms=0), factory).run(source())
    assert all(client.closed for client in factory.clients)
    assert not [t for t in threading.enumerate() if t.name.startswith("corsmisc-worker-")]


def test_empty_input_completes_with_no_results():
    factory = RecordingFactory()
    assert Dispatcher(ProbeSettings(concurrency=5, delay_ms=0), factory).run([]) == []
    assert factory.requests == []
