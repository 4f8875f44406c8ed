# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for corsmisc."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("CORSMISC_LOG_LEVEL", "WARNING").upper()
_QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for CLI/library use."""
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    # Transport libraries log every request; verbose output is about origins, not sockets.
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["setup_logging"]
