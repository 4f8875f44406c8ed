# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for corsmisc."""

import os
from dataclasses import dataclass, field, replace
from typing import Any

from .version import __version__

DEFAULT_USER_AGENT = f"corsmisc/{__version__} (+CORS misconfiguration scanner)"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_str_env(name: str, default: str | None) -> str | None:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip() or None


@dataclass(frozen=True)
class ProbeSettings:
    """
    Immutable probe configuration shared by the dispatcher and every worker.

    `delay_ms` is slept before each request (including the first one for a target);
    `timeout` bounds a single request, never a whole target.
    """

    concurrency: int = 20
    delay_ms: int = 100
    timeout: float = 10.0
    method: str = "GET"
    proxy: str | None = None
    probe_all: bool = False
    headers: dict[str, str] = field(default_factory=dict)
    user_agent: str = DEFAULT_USER_AGENT
    verify_tls: bool = False

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be a positive integer, got {self.concurrency}")
        if self.delay_ms < 0:
            raise ValueError(f"delay must not be negative, got {self.delay_ms}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        method = str(self.method or "").strip().upper()
        if not method:
            raise ValueError("HTTP method must not be empty")
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "headers", dict(self.headers or {}))

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        defaults = cls()
        concurrency = _int_env("CORSMISC_CONCURRENCY", defaults.concurrency)
        if concurrency < 1:
            concurrency = defaults.concurrency
        delay_ms = _int_env("CORSMISC_DELAY_MS", defaults.delay_ms)
        if delay_ms < 0:
            delay_ms = defaults.delay_ms
        timeout = _float_env("CORSMISC_TIMEOUT", defaults.timeout)
        if timeout <= 0:
            timeout = defaults.timeout
        return cls(
            concurrency=concurrency,
            delay_ms=delay_ms,
            timeout=timeout,
            method=os.getenv("CORSMISC_METHOD", defaults.method).strip() or defaults.method,
            proxy=_optional_str_env("CORSMISC_PROXY", defaults.proxy),
            probe_all=_bool_env("CORSMISC_PROBE_ALL", defaults.probe_all),
            user_agent=os.getenv("CORSMISC_USER_AGENT", defaults.user_agent),
            verify_tls=_bool_env("CORSMISC_VERIFY_TLS", defaults.verify_tls),
        )

    def with_overrides(self, **overrides: Any) -> "ProbeSettings":
        """Return a copy with non-None overrides applied."""
        filtered = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **filtered) if filtered else self


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()
