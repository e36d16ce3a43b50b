# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Diagnostic logging for the healthprobe CLI."""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "HEALTHPROBE_LOG_LEVEL"
FALLBACK_LOG_LEVEL = "WARNING"


def resolve_level(level: str | None = None) -> int:
    """
    Turn a level name ("debug", "INFO") or number into a logging level.

    Without an explicit level, HEALTHPROBE_LOG_LEVEL is read at call time.
    Unknown names raise ValueError.
    """
    name = (level or os.getenv(LOG_LEVEL_ENV) or FALLBACK_LOG_LEVEL).strip().upper()
    if name.isdigit():
        return int(name)
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"unknown log level {name!r}")
    return value


def setup_logging(level: str | None = None) -> None:
    """Send records to stderr so they never interleave with the stdout result line."""
    logging.basicConfig(
        level=resolve_level(level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


__all__ = ["LOG_LEVEL_ENV", "resolve_level", "setup_logging"]
