# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Host interface models used by interface selection."""

from __future__ import annotations

import ipaddress
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


@dataclass(frozen=True)
class InterfaceAddress:
    """The one address picked for a check; not retained past it."""

    interface: str
    ip: ipaddress.IPv4Address


@dataclass
class HostInterface:
    """
    An enumerated network interface.

    Addresses are looked up lazily through `lookup` so a single broken
    interface can fail on its own without aborting enumeration.
    """

    name: str
    lookup: Callable[[], Sequence[IPAddress]] = field(default=lambda: (), repr=False)

    def addresses(self) -> Sequence[IPAddress]:
        return self.lookup()

    @classmethod
    def static(cls, name: str, addresses: Sequence[IPAddress | str]) -> HostInterface:
        parsed = tuple(ipaddress.ip_address(a) if isinstance(a, str) else a for a in addresses)
        return cls(name=name, lookup=lambda: parsed)


__all__ = ["HostInterface", "IPAddress", "InterfaceAddress"]
