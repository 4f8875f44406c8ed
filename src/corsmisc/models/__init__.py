# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for corsmisc."""

from .report import Result
from .target import TargetURL

__all__ = [
    "Result",
    "TargetURL",
]
