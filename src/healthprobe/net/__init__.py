# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Address formatting, interface selection and dialing."""

from .dial import NETWORKS, Dialer, dial
from .interfaces import enumerate_interfaces, interfaces_from_mapping, select_address
from .ipformat import format_ip, join_host_port

__all__ = [
    "NETWORKS",
    "Dialer",
    "dial",
    "enumerate_interfaces",
    "format_ip",
    "interfaces_from_mapping",
    "join_host_port",
    "select_address",
]
