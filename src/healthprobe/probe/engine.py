# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe engine: connection and HTTP reachability checks against one address."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import httpx

from ..config import ProbeConfig
from ..errors import ErrorCategory, categorize_exception
from ..http.client import HttpClient, create_default_http_client
from ..http.models import HttpRequest
from ..http.url import build_probe_url
from ..models.interface import HostInterface
from ..models.result import ProbeFailure, ProbeResult, ProbeSuccess
from ..net.dial import Dialer, dial
from ..net.interfaces import select_address
from ..net.ipformat import AddressLike, format_ip

logger = logging.getLogger(__name__)

NO_INTERFACE_MESSAGE = "failure to find suitable interface"


class ProbeEngine:
    """
    Runs one check per call. Nothing is retried here; repetition belongs to
    the poll loop.

    The mode is fixed by the config: an empty `uri` means a connection probe,
    anything else an HTTP GET that must answer 200.
    """

    def __init__(
        self,
        config: ProbeConfig,
        http_client: HttpClient | None = None,
        dialer: Dialer = dial,
    ):
        self.config = config
        self._http_client = http_client
        self._dialer = dialer

    @property
    def http_client(self) -> HttpClient:
        if self._http_client is None:
            self._http_client = create_default_http_client(self.config)
        return self._http_client

    def close(self) -> None:
        if self._http_client is not None:
            self._http_client.close()

    def check_interfaces(self, interfaces: Iterable[HostInterface]) -> ProbeResult:
        selected = select_address(interfaces)
        if selected is None:
            return ProbeFailure.from_category(ErrorCategory.NO_SUITABLE_INTERFACE, NO_INTERFACE_MESSAGE)
        return self.check(selected.ip)

    def check(self, address: AddressLike) -> ProbeResult:
        if self.config.is_http:
            return self.http_check(address)
        return self.port_check(address)

    def port_check(self, address: AddressLike) -> ProbeResult:
        host = format_ip(address)
        try:
            conn = self._dialer(self.config.network, host, self.config.port, self.config.timeout)
        except Exception as exc:  # noqa: BLE001
            category = categorize_exception(exc)
            if category == ErrorCategory.CONNECTION_TIMEOUT:
                return ProbeFailure.from_category(category, f"timeout when making TCP connection: {exc}")
            return ProbeFailure.from_category(
                ErrorCategory.CONNECTION_FAILURE, f"failure to make TCP connection: {exc}"
            )
        conn.close()
        logger.debug("Connected to %s port %s over %s", host, self.config.port, self.config.network)
        return ProbeSuccess()

    def http_check(self, address: AddressLike) -> ProbeResult:
        try:
            url = build_probe_url(format_ip(address), self.config.port, self.config.uri)
        except httpx.InvalidURL as exc:
            return ProbeFailure.from_category(ErrorCategory.URL_CONSTRUCTION, f"failed to parse URL: {exc}")

        response = self.http_client.request(HttpRequest(url=url, timeout=self.config.timeout))

        if response.ok:
            logger.debug("GET %s -> %s", url, response.status_code)
            if response.status_code == httpx.codes.OK:
                return ProbeSuccess()
            return ProbeFailure.from_category(
                ErrorCategory.HTTP_STATUS_FAILURE,
                f"failure to get valid HTTP status code: {response.status_code}",
            )

        detail = f'Get "{url}": {response.error_message}'
        if response.timed_out:
            return ProbeFailure.from_category(ErrorCategory.HTTP_REQUEST_TIMEOUT, f"timeout when making HTTP request: {detail}")
        if response.error_category == ErrorCategory.URL_CONSTRUCTION:
            return ProbeFailure.from_category(ErrorCategory.URL_CONSTRUCTION, f"failed to parse URL: {response.error_message}")
        return ProbeFailure.from_category(ErrorCategory.HTTP_REQUEST_FAILURE, f"failure to make HTTP request: {detail}")
