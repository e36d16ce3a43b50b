# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Host interface enumeration and selection of the address to probe."""

from __future__ import annotations

import ipaddress
import logging
import socket
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import psutil

from ..errors import InterfaceDiscoveryError
from ..models.interface import HostInterface, InterfaceAddress, IPAddress

logger = logging.getLogger(__name__)

_IP_FAMILIES = {socket.AF_INET, socket.AF_INET6}


def _parse_addresses(raw_addrs: Iterable[Any]) -> list[IPAddress]:
    addresses: list[IPAddress] = []
    for entry in raw_addrs:
        if getattr(entry, "family", None) not in _IP_FAMILIES:
            continue
        # Strip any "%zone" suffix psutil leaves on link-local IPv6 entries.
        text = str(entry.address).split("%", 1)[0]
        addresses.append(ipaddress.ip_address(text))
    return addresses


def interfaces_from_mapping(raw: Mapping[str, Sequence[Any]]) -> list[HostInterface]:
    """Wrap a psutil.net_if_addrs()-shaped mapping, preserving its order."""
    return [HostInterface(name=name, lookup=lambda entries=entries: _parse_addresses(entries)) for name, entries in raw.items()]


def enumerate_interfaces() -> list[HostInterface]:
    """Return the host's interfaces in the order the OS reports them."""
    try:
        raw = psutil.net_if_addrs()
    except (OSError, psutil.Error) as exc:
        raise InterfaceDiscoveryError(str(exc)) from exc
    interfaces = interfaces_from_mapping(raw)
    logger.debug("Enumerated %d interfaces: %s", len(interfaces), ", ".join(i.name for i in interfaces))
    return interfaces


def as_ipv4(address: IPAddress) -> ipaddress.IPv4Address | None:
    """IPv4 form of an address (including IPv4-mapped IPv6), else None."""
    if isinstance(address, ipaddress.IPv4Address):
        return address
    return address.ipv4_mapped


def select_address(interfaces: Iterable[HostInterface]) -> InterfaceAddress | None:
    """
    Pick the first non-loopback IPv4 address, in enumeration order.

    Interfaces whose address lookup fails are skipped. Nothing past the first
    qualifying address is inspected.
    """
    for intf in interfaces:
        try:
            addresses = intf.addresses()
        except (OSError, ValueError) as exc:
            logger.debug("Skipping interface %s: %s", intf.name, exc)
            continue

        for address in addresses:
            v4 = as_ipv4(address)
            if v4 is None or v4.is_loopback:
                continue
            logger.debug("Selected %s on interface %s", v4, intf.name)
            return InterfaceAddress(interface=intf.name, ip=v4)
    return None


__all__ = ["as_ipv4", "enumerate_interfaces", "interfaces_from_mapping", "select_address"]
