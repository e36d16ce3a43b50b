# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level healthprobe facade wiring interfaces, engine and poll loop."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from contextlib import suppress

from .config import ProbeConfig
from .errors import ErrorCategory, InterfaceDiscoveryError
from .http.client import HttpClient
from .models.interface import HostInterface
from .models.result import ProbeFailure, ProbeResult
from .net.dial import Dialer, dial
from .net.interfaces import enumerate_interfaces
from .poll import PollMode, run
from .probe.engine import ProbeEngine

logger = logging.getLogger(__name__)


class HealthProbe:
    """
    Convenience wrapper owning one ProbeEngine (and its HTTP client) for a run.

    Interfaces are enumerated once per `run` and reused for every attempt; an
    address that appears after startup is not picked up until the next run.
    """

    def __init__(
        self,
        config: ProbeConfig,
        *,
        http_client: HttpClient | None = None,
        dialer: Dialer = dial,
        interfaces_provider: Callable[[], Sequence[HostInterface]] = enumerate_interfaces,
    ):
        self.config = config
        self.engine = ProbeEngine(config, http_client=http_client, dialer=dialer)
        self._interfaces_provider = interfaces_provider

    def run(
        self,
        mode: PollMode | None = None,
        *,
        stop: threading.Event | None = None,
        sleep: Callable[[float], object] | None = None,
        on_attempt: Callable[[int, ProbeResult], object] | None = None,
    ) -> ProbeResult:
        try:
            interfaces = list(self._interfaces_provider())
        except InterfaceDiscoveryError as exc:
            return ProbeFailure.from_category(ErrorCategory.INTERFACE_DISCOVERY, f"failure to get interfaces: {exc}")

        logger.debug(
            "Probing port %s over %s%s",
            self.config.port,
            self.config.network,
            f" with GET {self.config.uri}" if self.config.is_http else "",
        )
        return run(
            lambda: self.engine.check_interfaces(interfaces),
            mode or PollMode.single_shot(),
            sleep=sleep,
            stop=stop,
            on_attempt=on_attempt,
        )

    def close(self) -> None:
        with suppress(Exception):
            self.engine.close()

    def __enter__(self) -> HealthProbe:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
