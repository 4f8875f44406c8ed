# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""JSON persistence for Results, written once after a run completes."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..errors import ResultSinkError
from ..models import Result


def results_to_mapping(results: Iterable[Result]) -> dict[str, dict[str, Any]]:
    """Key results by target URL; a repeated URL keeps its last Result."""
    return {result.url: result.to_dict() for result in results}


def results_from_mapping(data: Any) -> list[Result]:
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object keyed by target URL")
    return [Result.from_dict(url, body if isinstance(body, dict) else {}) for url, body in data.items()]


def resolve_output_path(path: str | Path) -> Path:
    """A new file without a `.json` extension gets one; existing files are used as named."""
    target = Path(path)
    if not target.exists() and target.suffix.lower() != ".json":
        target = target.with_name(target.name + ".json")
    return target


def save_results(path: str | Path, results: Iterable[Result]) -> Path:
    """Write results as tab-indented JSON, creating parent directories. Returns the path written."""
    target = resolve_output_path(path)
    payload = json.dumps(results_to_mapping(results), indent="\t")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise ResultSinkError(f"cannot write results to {target}: {exc}") from exc
    return target


def load_results(path: str | Path) -> list[Result]:
    """Reload results written by `save_results`, preserving origin order and ACAC."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return results_from_mapping(data)
    except (OSError, ValueError) as exc:
        raise ResultSinkError(f"cannot load results from {path}: {exc}") from exc


__all__ = [
    "load_results",
    "resolve_output_path",
    "results_from_mapping",
    "results_to_mapping",
    "save_results",
]
