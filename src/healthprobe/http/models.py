# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by the HTTP probe."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import ErrorCategory

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    timeout: float | None = None
    allow_redirects: bool = True


@dataclass
class HttpResponse:
    """
    Outcome of one request.

    `ok` means a response arrived (any status); transport failures carry
    `error_message` and the `error_category` they were classified as.
    """

    ok: bool
    status_code: int | None = None
    error_message: str | None = None
    error_category: ErrorCategory | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def timed_out(self) -> bool:
        return self.error_category == ErrorCategory.HTTP_REQUEST_TIMEOUT
