# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""corsmisc CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..config import ProbeSettings, load_probe_settings
from ..errors import ResultSinkError, TargetSourceError
from ..http.headers import parse_header_line
from ..log import setup_logging
from ..models import Result
from ..scan.report import results_to_mapping, save_results
from ..scan.runner import Dispatcher
from ..targets import iter_targets
from .report import ConsoleReporter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="corsmisc",
        description="Probe URLs for CORS misconfigurations (reflected origins, credentials allowed)",
    )
    parser.add_argument("-urls", dest="urls", required=True, help="list of URLs, one per line (use `-` to read stdin)")
    parser.add_argument("-all", dest="all", action="store_true", help="test all Origins instead of stopping at the first reflection")
    parser.add_argument("-c", dest="concurrency", type=int, help="concurrency level (default: 20)")
    parser.add_argument("-d", dest="delay", type=int, help="delay between requests in milliseconds (default: 100)")
    parser.add_argument(
        "-H",
        dest="headers",
        action="append",
        default=[],
        metavar="'Name: Value'",
        help="extra request header, repeatable",
    )
    parser.add_argument("-X", dest="method", help="HTTP method to use (default: GET)")
    parser.add_argument("-x", dest="proxy", help="HTTP proxy URL")
    parser.add_argument("-timeout", dest="timeout", type=float, help="HTTP request timeout in seconds (default: 10)")
    parser.add_argument("-o", dest="output", help="JSON output file")
    parser.add_argument("-json", dest="json", action="store_true", help="print results as JSON to stdout")
    parser.add_argument("-nc", dest="no_color", action="store_true", help="no color mode")
    parser.add_argument("-v", dest="verbose", action="store_true", help="verbose mode")
    return parser


def _parse_headers(parser: argparse.ArgumentParser, values: list[str]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for value in values:
        try:
            name, header_value = parse_header_line(value)
        except ValueError as exc:
            parser.error(str(exc))
        headers[name] = header_value
    return headers


def build_settings(parser: argparse.ArgumentParser, args: argparse.Namespace) -> ProbeSettings:
    headers = _parse_headers(parser, args.headers)
    try:
        return load_probe_settings().with_overrides(
            concurrency=args.concurrency,
            delay_ms=args.delay,
            timeout=args.timeout,
            method=args.method,
            proxy=args.proxy,
            probe_all=True if args.all else None,
            headers=headers or None,
        )
    except ValueError as exc:
        parser.error(str(exc))


def _print_json(results: list[Result]) -> None:
    payload: dict[str, Any] = results_to_mapping(results)
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)
    settings = build_settings(parser, args)

    reporter = ConsoleReporter(color=not args.no_color)
    reporter.banner()

    on_result = None if args.json else reporter.result
    try:
        results = Dispatcher(settings).run(iter_targets(args.urls), on_result=on_result)
    except TargetSourceError as exc:
        reporter.error(str(exc))
        return 1
    except KeyboardInterrupt:
        reporter.error("interrupted")
        return 130

    if args.json:
        _print_json(results)
    elif args.verbose:
        reporter.summary(results)

    if args.output:
        try:
            written = save_results(args.output, results)
        except ResultSinkError as exc:
            reporter.error(str(exc))
            return 1
        if args.verbose:
            reporter.info(f"results saved to {written}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
