# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Connection-oriented dialing for the connection probe."""

from __future__ import annotations

import socket
from typing import Protocol

from ..errors import DialError
from .ipformat import join_host_port

_INET_FAMILIES: dict[str, int] = {
    "tcp": socket.AF_UNSPEC,
    "tcp4": socket.AF_INET,
    "tcp6": socket.AF_INET6,
}
NETWORKS = (*_INET_FAMILIES, "unix")


class Dialer(Protocol):
    def __call__(self, network: str, host: str, port: str, timeout: float) -> socket.socket: ...


def _dial_inet(family: int, host: str, port: str, timeout: float) -> socket.socket:
    last_exc: OSError | None = None
    for af, socktype, proto, _canon, sockaddr in socket.getaddrinfo(host, port, family, socket.SOCK_STREAM):
        sock = socket.socket(af, socktype, proto)
        try:
            sock.settimeout(timeout)
            sock.connect(sockaddr)
            return sock
        except OSError as exc:
            sock.close()
            last_exc = exc
    if last_exc is None:
        raise OSError(f"no addresses for {host}")
    raise last_exc


def _dial_unix(path: str, timeout: float) -> socket.socket:
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.settimeout(timeout)
        sock.connect(path)
    except OSError:
        sock.close()
        raise
    return sock


def dial(network: str, host: str, port: str, timeout: float) -> socket.socket:
    """
    Open a stream connection to host:port within `timeout` seconds.

    For "unix" the joined "host:port" string is used as the socket path.
    Any failure is raised as DialError.
    """
    address = join_host_port(host, port)
    try:
        if network == "unix":
            return _dial_unix(address, timeout)
        family = _INET_FAMILIES.get(network)
        if family is None:
            raise ValueError(f"unknown network {network}")
        return _dial_inet(family, host, port, timeout)
    except (OSError, ValueError) as exc:
        raise DialError(network, address, exc) from exc


__all__ = ["NETWORKS", "Dialer", "dial"]
