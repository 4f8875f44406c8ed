# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class CorsmiscError(Exception):
    """Base class for errors surfaced by corsmisc."""


class TargetSourceError(CorsmiscError):
    """The list of targets could not be read (fatal for a run)."""


class TargetParseError(CorsmiscError, ValueError):
    """A single target URL could not be parsed (the target is skipped)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"cannot parse target {url!r}: {reason}")
        self.url = url
        self.reason = reason


class ResultSinkError(CorsmiscError):
    """Results could not be persisted after a run."""


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    PROXY_ERROR = "PROXY_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, httpx.ProxyError):
        return ErrorCategory.PROXY_ERROR

    if isinstance(exc, (httpx.UnsupportedProtocol, httpx.InvalidURL, httpx.LocalProtocolError)):
        return ErrorCategory.INVALID_REQUEST

    # httpx wraps the underlying OS error; inspect the cause chain for TLS/DNS specifics.
    seen: set[int] = set()
    cause: BaseException | None = exc
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        if isinstance(cause, (ssl_module.SSLError, ssl_module.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(cause, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR
        cause = cause.__cause__ or cause.__context__

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout during probe",
        ErrorCategory.SSL_ERROR: "TLS handshake failure",
        ErrorCategory.PROXY_ERROR: "Upstream proxy failure",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.INVALID_REQUEST: "Request could not be built for this target",
        ErrorCategory.UNKNOWN_ERROR: "Network error during probe",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Probe failed due to network error")


__all__ = [
    "CorsmiscError",
    "ErrorCategory",
    "ResultSinkError",
    "TargetParseError",
    "TargetSourceError",
    "categorize_exception",
    "error_category_to_reason",
]
