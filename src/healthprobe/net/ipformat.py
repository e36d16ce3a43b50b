# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Canonical text rendering of IP addresses.

Digits are emitted by hand into a bytearray instead of going through str.format
or ipaddress, a micro-optimization; only the output is a contract. It matches the
standard renderings: dotted decimal for IPv4 (including IPv4-mapped IPv6) and RFC 5952
for IPv6.
"""

from __future__ import annotations

import ipaddress

IPV4_LEN = 4
IPV6_LEN = 16
NIL = "<nil>"

_HEX_DIGITS = b"0123456789abcdef"
_V4_IN_V6_PREFIX = b"\x00" * 10 + b"\xff\xff"

AddressLike = bytes | bytearray | ipaddress.IPv4Address | ipaddress.IPv6Address | None


def _packed(address: AddressLike) -> bytes:
    if address is None:
        return b""
    if isinstance(address, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return address.packed
    return bytes(address)


def to4(raw: bytes) -> bytes | None:
    """Return the 4-byte form of an IPv4 or IPv4-mapped address, else None."""
    if len(raw) == IPV4_LEN:
        return raw
    if len(raw) == IPV6_LEN and raw[:12] == _V4_IN_V6_PREFIX:
        return raw[12:]
    return None


def format_ip(address: AddressLike) -> str:
    raw = _packed(address)
    if not raw:
        return NIL

    p4 = to4(raw)
    if p4 is not None:
        return _format_ipv4(p4)
    if len(raw) != IPV6_LEN:
        return "?" + _hex_string(raw)
    return _format_ipv6(raw)


def _append_decimal(buf: bytearray, val: int) -> None:
    if val == 0:
        buf.append(0x30)
        return
    digits = bytearray()
    while val >= 10:
        q = val // 10
        digits.append(0x30 + val - q * 10)
        val = q
    digits.append(0x30 + val)
    digits.reverse()
    buf += digits


def _format_ipv4(raw: bytes) -> str:
    buf = bytearray()
    _append_decimal(buf, raw[0])
    buf.append(0x2E)
    _append_decimal(buf, raw[1])
    buf.append(0x2E)
    _append_decimal(buf, raw[2])
    buf.append(0x2E)
    _append_decimal(buf, raw[3])
    return buf.decode("ascii")


def _append_hex(buf: bytearray, val: int) -> None:
    if val == 0:
        buf.append(0x30)
        return
    started = False
    for shift in (12, 8, 4, 0):
        nibble = (val >> shift) & 0xF
        if nibble or started:
            buf.append(_HEX_DIGITS[nibble])
            started = True


def _longest_zero_run(raw: bytes) -> tuple[int, int]:
    """Byte offsets [start, end) of the longest all-zero group run; earliest wins ties."""
    e0 = -1
    e1 = -1
    i = 0
    while i < IPV6_LEN:
        j = i
        while j < IPV6_LEN and raw[j] == 0 and raw[j + 1] == 0:
            j += 2
        if j > i and j - i > e1 - e0:
            e0 = i
            e1 = j
            i = j
        i += 2
    # "::" must not stand in for a single 16-bit zero group.
    if e1 - e0 <= 2:
        return -1, -1
    return e0, e1


def _format_ipv6(raw: bytes) -> str:
    e0, e1 = _longest_zero_run(raw)
    buf = bytearray()
    i = 0
    while i < IPV6_LEN:
        if i == e0:
            buf += b"::"
            i = e1
            if i >= IPV6_LEN:
                break
        elif i > 0:
            buf.append(0x3A)
        _append_hex(buf, (raw[i] << 8) | raw[i + 1])
        i += 2
    return buf.decode("ascii")


def _hex_string(raw: bytes) -> str:
    buf = bytearray(len(raw) * 2)
    for i, b in enumerate(raw):
        buf[i * 2] = _HEX_DIGITS[b >> 4]
        buf[i * 2 + 1] = _HEX_DIGITS[b & 0xF]
    return buf.decode("ascii")


def join_host_port(host: str, port: str) -> str:
    """Combine host and port into "host:port", bracketing IPv6 literals."""
    if ":" in host:
        return "[" + host + "]:" + port
    return host + ":" + port


__all__ = ["IPV4_LEN", "IPV6_LEN", "NIL", "format_ip", "join_host_port", "to4"]
