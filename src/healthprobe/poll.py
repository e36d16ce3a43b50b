# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-shot, readiness and liveness polling around a check."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .models.result import ProbeResult
from .utils.duration import format_duration

logger = logging.getLogger(__name__)


class PollKind(str, Enum):
    SINGLE_SHOT = "single_shot"
    READINESS = "readiness"
    LIVENESS = "liveness"


@dataclass(frozen=True)
class PollMode:
    kind: PollKind = PollKind.SINGLE_SHOT
    interval: float = 0.0

    @classmethod
    def single_shot(cls) -> PollMode:
        return cls()

    @classmethod
    def readiness(cls, interval: float) -> PollMode:
        if interval <= 0:
            raise ValueError("readiness interval must be positive")
        return cls(PollKind.READINESS, interval)

    @classmethod
    def liveness(cls, interval: float) -> PollMode:
        if interval <= 0:
            raise ValueError("liveness interval must be positive")
        return cls(PollKind.LIVENESS, interval)

    @classmethod
    def from_intervals(cls, readiness_interval: float, liveness_interval: float) -> PollMode:
        """Pick the mode the way the flags do: a positive interval enables it, readiness first."""
        if readiness_interval > 0:
            return cls.readiness(readiness_interval)
        if liveness_interval > 0:
            return cls.liveness(liveness_interval)
        return cls.single_shot()


def run(
    check: Callable[[], ProbeResult],
    mode: PollMode,
    *,
    sleep: Callable[[float], object] | None = None,
    stop: threading.Event | None = None,
    on_attempt: Callable[[int, ProbeResult], object] | None = None,
) -> ProbeResult:
    """
    Run `check` according to `mode` and return the deciding result.

    Readiness returns the first success, liveness the first failure; neither
    ends otherwise. When `stop` is set between attempts the most recent result
    is returned. With a stop event and no explicit `sleep`, waiting happens on
    the event so a stop cuts the sleep short. `on_attempt(n, result)` sees every
    attempt, numbered from 1, before the loop decides whether to continue.
    """
    if sleep is None:
        sleep = stop.wait if stop is not None else time.sleep

    attempt = 1
    result = check()
    logger.debug("Attempt %d (%s): %s", attempt, mode.kind.value, result)
    if on_attempt is not None:
        on_attempt(attempt, result)
    if mode.kind == PollKind.SINGLE_SHOT:
        return result

    done_when_ok = mode.kind == PollKind.READINESS
    while result.ok != done_when_ok:
        if stop is not None and stop.is_set():
            logger.debug("Stop requested after %d attempts", attempt)
            break
        sleep(mode.interval)
        if stop is not None and stop.is_set():
            logger.debug("Stop requested after %d attempts", attempt)
            break
        attempt += 1
        result = check()
        logger.debug(
            "Attempt %d (%s, every %s): %s", attempt, mode.kind.value, format_duration(mode.interval), result
        )
        if on_attempt is not None:
            on_attempt(attempt, result)
    return result


__all__ = ["PollKind", "PollMode", "run"]
