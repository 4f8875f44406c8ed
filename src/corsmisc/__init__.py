# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
corsmisc package entrypoint.

corsmisc probes web endpoints for CORS misconfigurations: it sends crafted `Origin`
headers and records every origin the server reflects in Access-Control-Allow-Origin,
together with the Access-Control-Allow-Credentials value seen alongside it. HTTP behavior
is abstracted behind an injectable client interface, and domain objects are modeled with
typed dataclasses.
"""

from .config import ProbeSettings, load_probe_settings
from .errors import CorsmiscError, ErrorCategory, ResultSinkError, TargetParseError, TargetSourceError
from .http import (
    HttpxProbeClient,
    ProbeClient,
    ProbeRequest,
    ProbeResponse,
    StubProbeClient,
    create_default_probe_client,
    parse_target,
)
from .log import setup_logging
from .models import Result, TargetURL
from .runtime import Corsmisc
from .scan import Dispatcher, TargetEvaluator, generate_origins, load_results, save_results
from .version import __version__

__all__ = [
    "Corsmisc",
    "CorsmiscError",
    "Dispatcher",
    "ErrorCategory",
    "HttpxProbeClient",
    "ProbeClient",
    "ProbeRequest",
    "ProbeResponse",
    "ProbeSettings",
    "Result",
    "ResultSinkError",
    "StubProbeClient",
    "TargetEvaluator",
    "TargetParseError",
    "TargetSourceError",
    "TargetURL",
    "create_default_probe_client",
    "generate_origins",
    "load_probe_settings",
    "load_results",
    "parse_target",
    "save_results",
    "setup_logging",
    "__version__",
]
