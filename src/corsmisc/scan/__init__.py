# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probing engine: candidate origins, per-target evaluation and the worker pool."""

from .engine import TargetEvaluator, is_reflected
from .origins import SENTINEL_DOMAIN, SPECIAL_CHARACTERS, THIRD_PARTY_ORIGINS, generate_origins
from .report import load_results, save_results
from .runner import Dispatcher

__all__ = [
    "Dispatcher",
    "SENTINEL_DOMAIN",
    "SPECIAL_CHARACTERS",
    "THIRD_PARTY_ORIGINS",
    "TargetEvaluator",
    "generate_origins",
    "is_reflected",
    "load_results",
    "save_results",
]
