# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Target list reading: one URL per line from a file or standard input."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from typing import TextIO

from .errors import TargetSourceError

STDIN_MARKER = "-"


def iter_lines(stream: TextIO) -> Iterator[str]:
    """Yield lines without their newline, skipping blank ones. Malformed URLs pass through."""
    for line in stream:
        text = line.rstrip("\r\n")
        if text.strip():
            yield text


def iter_targets(path: str, *, stdin: TextIO | None = None) -> Iterator[str]:
    """
    Yield target URLs from `path`, or from standard input when `path` is "-".

    Raises TargetSourceError when the file cannot be opened or read, or when standard
    input is an interactive terminal with nothing piped in.
    """
    if path == STDIN_MARKER:
        stream = stdin if stdin is not None else sys.stdin
        if stream is None or stream.isatty():
            raise TargetSourceError("no stdin: pipe target URLs in or pass a file path")
        try:
            yield from iter_lines(stream)
        except (OSError, UnicodeDecodeError) as exc:
            raise TargetSourceError(f"cannot read targets from stdin: {exc}") from exc
        return

    try:
        with open(path, encoding="utf-8") as handle:
            yield from iter_lines(handle)
    except (OSError, UnicodeDecodeError) as exc:
        raise TargetSourceError(f"cannot read targets from {path}: {exc}") from exc


__all__ = ["STDIN_MARKER", "iter_lines", "iter_targets"]
