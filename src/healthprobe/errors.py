# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
from enum import Enum, IntEnum

import httpx


class FailureCode(IntEnum):
    """Exit codes orchestrators branch on. Values are stable."""

    SUCCESS = 0
    FLAG_PARSE = 2
    NO_SUITABLE_INTERFACE = 3
    CONNECTION_FAILURE = 4
    HTTP_REQUEST_FAILURE = 5
    HTTP_STATUS_FAILURE = 6
    CONNECTION_TIMEOUT = 64
    HTTP_REQUEST_TIMEOUT = 65
    UNKNOWN = 127
    # Placeholder, not a stable contract.
    URL_CONSTRUCTION = -1


class ErrorCategory(str, Enum):
    INTERFACE_DISCOVERY = "INTERFACE_DISCOVERY"
    NO_SUITABLE_INTERFACE = "NO_SUITABLE_INTERFACE"
    CONNECTION_FAILURE = "CONNECTION_FAILURE"
    CONNECTION_TIMEOUT = "CONNECTION_TIMEOUT"
    HTTP_REQUEST_FAILURE = "HTTP_REQUEST_FAILURE"
    HTTP_REQUEST_TIMEOUT = "HTTP_REQUEST_TIMEOUT"
    HTTP_STATUS_FAILURE = "HTTP_STATUS_FAILURE"
    URL_CONSTRUCTION = "URL_CONSTRUCTION"
    UNKNOWN = "UNKNOWN"


_CATEGORY_CODES: dict[ErrorCategory, FailureCode] = {
    ErrorCategory.INTERFACE_DISCOVERY: FailureCode.UNKNOWN,
    ErrorCategory.NO_SUITABLE_INTERFACE: FailureCode.NO_SUITABLE_INTERFACE,
    ErrorCategory.CONNECTION_FAILURE: FailureCode.CONNECTION_FAILURE,
    ErrorCategory.CONNECTION_TIMEOUT: FailureCode.CONNECTION_TIMEOUT,
    ErrorCategory.HTTP_REQUEST_FAILURE: FailureCode.HTTP_REQUEST_FAILURE,
    ErrorCategory.HTTP_REQUEST_TIMEOUT: FailureCode.HTTP_REQUEST_TIMEOUT,
    ErrorCategory.HTTP_STATUS_FAILURE: FailureCode.HTTP_STATUS_FAILURE,
    ErrorCategory.URL_CONSTRUCTION: FailureCode.URL_CONSTRUCTION,
    ErrorCategory.UNKNOWN: FailureCode.UNKNOWN,
}


class InterfaceDiscoveryError(RuntimeError):
    """Host interfaces could not be enumerated at all."""


class DialError(OSError):
    """
    A failed connection attempt, rendered like "dial tcp 10.0.0.2:8080: <cause>".

    `timeout` tells a deadline expiry apart from every other failure.
    """

    def __init__(self, network: str, address: str, cause: BaseException):
        self.network = network
        self.address = address
        self.cause = cause
        self.message = f"dial {network} {address}: {cause}"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    @property
    def timeout(self) -> bool:
        return is_timeout(self.cause)


def is_timeout(exc: BaseException) -> bool:
    """True when the exception represents an expired deadline."""
    if isinstance(exc, DialError):
        return exc.timeout
    if isinstance(exc, httpx.TimeoutException):
        return True
    return isinstance(exc, (TimeoutError, socket.timeout))


def categorize_exception(exc: BaseException, *, http: bool = False) -> ErrorCategory:
    """
    Map Python/httpx exceptions raised during a probe to ErrorCategory.

    `http` selects between the HTTP request and the raw connection families.
    """
    if isinstance(exc, InterfaceDiscoveryError):
        return ErrorCategory.INTERFACE_DISCOVERY

    if http:
        if isinstance(exc, httpx.InvalidURL):
            return ErrorCategory.URL_CONSTRUCTION
        if is_timeout(exc):
            return ErrorCategory.HTTP_REQUEST_TIMEOUT
        if isinstance(exc, (httpx.HTTPError, httpx.StreamError, OSError)):
            return ErrorCategory.HTTP_REQUEST_FAILURE
        return ErrorCategory.UNKNOWN

    if is_timeout(exc):
        return ErrorCategory.CONNECTION_TIMEOUT
    if isinstance(exc, (OSError, ValueError)):
        return ErrorCategory.CONNECTION_FAILURE
    return ErrorCategory.UNKNOWN


def category_to_code(category: ErrorCategory) -> FailureCode:
    return _CATEGORY_CODES.get(category, FailureCode.UNKNOWN)


__all__ = [
    "DialError",
    "ErrorCategory",
    "FailureCode",
    "InterfaceDiscoveryError",
    "categorize_exception",
    "category_to_code",
    "is_timeout",
]
