# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
healthprobe package entrypoint.

A process-health probe for orchestrators: it finds the host's first
non-loopback IPv4 address, checks that a port accepts connections (or that an
HTTP path answers 200) and reports the outcome as a stable exit code. HTTP
behavior is abstracted behind an injectable client interface, and outcomes are
modeled as a tagged success/failure dataclass union.
"""

from .config import ProbeConfig, ProbeSettings, load_probe_settings
from .errors import ErrorCategory, FailureCode
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, create_default_http_client
from .log import setup_logging
from .models import HostInterface, InterfaceAddress, ProbeFailure, ProbeResult, ProbeSuccess
from .net import enumerate_interfaces, format_ip, select_address
from .poll import PollMode
from .probe import ProbeEngine
from .runtime import HealthProbe
from .version import __version__

__all__ = [
    "ErrorCategory",
    "FailureCode",
    "HealthProbe",
    "HostInterface",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "InterfaceAddress",
    "PollMode",
    "ProbeConfig",
    "ProbeEngine",
    "ProbeFailure",
    "ProbeResult",
    "ProbeSettings",
    "ProbeSuccess",
    "create_default_http_client",
    "enumerate_interfaces",
    "format_ip",
    "load_probe_settings",
    "select_address",
    "setup_logging",
    "__version__",
]
