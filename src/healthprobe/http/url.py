# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Target URL construction for the HTTP probe."""

from __future__ import annotations

import httpx

from ..net.ipformat import join_host_port


def build_probe_url(host: str, port: str, uri: str) -> str:
    """
    Build "http://<host>:<port><uri>" and validate it.

    An empty port leaves a bare trailing ":" on the host; it is dropped unless
    the colon belongs to a bracketed IPv6 literal. Raises httpx.InvalidURL
    when the result does not parse (for example a non-numeric port).
    """
    netloc = join_host_port(host, port)
    if netloc.rfind(":") > netloc.rfind("]"):
        netloc = netloc.removesuffix(":")
    raw = "http://" + netloc + uri
    parsed = httpx.URL(raw)
    if not parsed.host:
        raise httpx.InvalidURL(f"missing host in {raw!r}")
    return str(parsed)


__all__ = ["build_probe_url"]
