# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import ipaddress
import socket
from collections import namedtuple

import psutil
import pytest

from healthprobe.errors import InterfaceDiscoveryError
from healthprobe.models.interface import HostInterface
from healthprobe.net import interfaces as interfaces_module
from healthprobe.net.interfaces import enumerate_interfaces, interfaces_from_mapping, select_address

snicaddr = namedtuple("snicaddr", ["family", "address", "netmask", "broadcast", "ptp"])


def _failing(name):
    def lookup():
        raise OSError(f"{name}: no such device")

    return HostInterface(name=name, lookup=lookup)


def test_picks_first_non_loopback_ipv4():
    interfaces = [
        HostInterface.static("lo", ["127.0.0.1", "::1"]),
        HostInterface.static("eth0", ["fe80::1", "10.0.0.5", "10.0.0.6"]),
        HostInterface.static("eth1", ["192.168.1.2"]),
    ]
    selected = select_address(interfaces)
    assert selected is not None
    assert selected.interface == "eth0"
    assert selected.ip == ipaddress.IPv4Address("10.0.0.5")


def test_stops_looking_after_first_match():
    looked_up = []

    def tracking(name, addrs):
        def lookup():
            looked_up.append(name)
            return [ipaddress.ip_address(a) for a in addrs]

        return HostInterface(name=name, lookup=lookup)

    selected = select_address([tracking("eth0", ["10.1.1.1"]), tracking("eth1", ["10.2.2.2"])])
    assert selected.ip == ipaddress.IPv4Address("10.1.1.1")
    assert looked_up == ["eth0"]


def test_skips_interfaces_whose_lookup_fails():
    selected = select_address([_failing("bad0"), HostInterface.static("eth0", ["172.16.0.9"])])
    assert selected.interface == "eth0"


def test_ipv4_mapped_address_qualifies():
    selected = select_address([HostInterface.static("eth0", ["::ffff:10.9.8.7"])])
    assert selected.ip == ipaddress.IPv4Address("10.9.8.7")


def test_mapped_loopback_is_rejected():
    assert select_address([HostInterface.static("lo", ["::ffff:127.0.0.1"])]) is None


@pytest.mark.parametrize(
    "interfaces",
    [
        [],
        [HostInterface.static("lo", ["127.0.0.1", "127.0.0.2"])],
        [HostInterface.static("eth0", ["fe80::1", "2001:db8::5"])],
        [_failing("bad0")],
    ],
)
def test_no_suitable_address(interfaces):
    assert select_address(interfaces) is None


def test_interfaces_from_mapping_parses_psutil_entries():
    raw = {
        "eth0": [
            snicaddr(psutil.AF_LINK, "00:11:22:33:44:55", None, None, None),
            snicaddr(socket.AF_INET6, "fe80::1%eth0", "ffff:ffff:ffff:ffff::", None, None),
            snicaddr(socket.AF_INET, "10.0.0.5", "255.255.255.0", "10.0.0.255", None),
        ],
        "lo": [snicaddr(socket.AF_INET, "127.0.0.1", "255.0.0.0", None, None)],
    }
    interfaces = interfaces_from_mapping(raw)
    assert [i.name for i in interfaces] == ["eth0", "lo"]
    assert list(interfaces[0].addresses()) == [
        ipaddress.IPv6Address("fe80::1"),
        ipaddress.IPv4Address("10.0.0.5"),
    ]
    assert select_address(interfaces).ip == ipaddress.IPv4Address("10.0.0.5")


def test_malformed_psutil_entry_skips_only_that_interface():
    raw = {
        "weird0": [snicaddr(socket.AF_INET, "not-an-ip", None, None, None)],
        "eth0": [snicaddr(socket.AF_INET, "10.0.0.7", None, None, None)],
    }
    assert select_address(interfaces_from_mapping(raw)).interface == "eth0"


def test_enumerate_interfaces_wraps_psutil_errors(monkeypatch):
    def boom():
        raise OSError("netlink unavailable")

    monkeypatch.setattr(interfaces_module.psutil, "net_if_addrs", boom)
    with pytest.raises(InterfaceDiscoveryError, match="netlink unavailable"):
        enumerate_interfaces()


def test_enumerate_interfaces_uses_psutil_order(monkeypatch):
    raw = {
        "b0": [snicaddr(socket.AF_INET, "10.0.0.2", None, None, None)],
        "a0": [snicaddr(socket.AF_INET, "10.0.0.1", None, None, None)],
    }
    monkeypatch.setattr(interfaces_module.psutil, "net_if_addrs", lambda: raw)
    assert [i.name for i in enumerate_interfaces()] == ["b0", "a0"]
