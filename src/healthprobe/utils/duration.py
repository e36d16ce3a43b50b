# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Parsing of Go-style duration strings ("100ms", "1m30s") into seconds."""

from __future__ import annotations

import re

_UNIT_SECONDS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_NUMBER = r"(\d+\.?\d*|\.\d+)"
_NUMBER_RE = re.compile(_NUMBER)
_COMPONENT_RE = re.compile(_NUMBER + r"(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """
    Parse a duration and return it in seconds.

    Accepts the Go syntax (a sequence of decimal numbers each followed by a
    unit, optionally signed) and, as a convenience, a bare number of seconds.
    Raises ValueError for anything else.
    """
    raw = str(value).strip()
    if not raw:
        raise ValueError("invalid duration: empty string")

    sign = 1.0
    body = raw
    if body[0] in "+-":
        sign = -1.0 if body[0] == "-" else 1.0
        body = body[1:]

    if _NUMBER_RE.fullmatch(body):
        return sign * float(body)

    total = 0.0
    pos = 0
    while pos < len(body):
        match = _COMPONENT_RE.match(body, pos)
        if not match:
            raise ValueError(f"invalid duration: {raw!r}")
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    if pos == 0:
        raise ValueError(f"invalid duration: {raw!r}")
    return sign * total


def format_duration(seconds: float) -> str:
    """Render seconds compactly for log lines (e.g. 0.1 -> "100ms")."""
    if seconds < 1 and seconds > 0:
        return f"{seconds * 1000:g}ms"
    return f"{seconds:g}s"


__all__ = ["format_duration", "parse_duration"]
