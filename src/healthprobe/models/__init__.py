# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for healthprobe."""

from .interface import HostInterface, InterfaceAddress
from .result import ProbeFailure, ProbeResult, ProbeSuccess, exit_status

__all__ = [
    "HostInterface",
    "InterfaceAddress",
    "ProbeFailure",
    "ProbeResult",
    "ProbeSuccess",
    "exit_status",
]
