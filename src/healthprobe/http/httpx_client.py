# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import time

import httpx

from ..config import ProbeConfig
from ..errors import categorize_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse

MAX_REDIRECTS = 10


def _remaining(deadline: float, request: httpx.Request) -> float:
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise httpx.ReadTimeout("request deadline exceeded", request=request)
    return remaining


class HttpxClient(HttpClient):
    """
    Synchronous httpx client wrapper.

    One deadline covers the whole request: every redirect hop, waiting for
    headers and draining each body. Redirects are followed here rather than
    by httpx so each hop is sent with only the time that is left.
    """

    def __init__(self, config: ProbeConfig | None = None, client: httpx.Client | None = None):
        self.config = config or ProbeConfig()
        # Targets are interface-local; proxy env vars never apply.
        self._client = client or httpx.Client(
            follow_redirects=False,
            timeout=self.config.timeout,
            trust_env=False,
        )

    def _send(self, outgoing: httpx.Request, deadline: float) -> tuple[httpx.Response, int]:
        outgoing.extensions["timeout"] = httpx.Timeout(_remaining(deadline, outgoing)).as_dict()
        resp = self._client.send(outgoing, stream=True, follow_redirects=False)
        drained = 0
        try:
            _remaining(deadline, outgoing)
            # Body is drained and discarded before the status is looked at.
            for chunk in resp.iter_raw():
                drained += len(chunk)
                _remaining(deadline, outgoing)
        finally:
            resp.close()
        return resp, drained

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.config.user_agent)
        timeout = request.timeout if request.timeout is not None else self.config.timeout

        try:
            deadline = time.monotonic() + timeout
            outgoing = self._client.build_request(request.method, request.url, headers=headers, timeout=timeout)
            drained = 0
            for hop in range(MAX_REDIRECTS + 1):
                resp, hop_bytes = self._send(outgoing, deadline)
                drained += hop_bytes
                if not request.allow_redirects or resp.next_request is None:
                    return HttpResponse(
                        ok=True,
                        status_code=resp.status_code,
                        meta={"body_bytes_drained": drained, "redirects": hop},
                    )
                outgoing = resp.next_request
            raise httpx.TooManyRedirects(f"stopped after {MAX_REDIRECTS} redirects", request=outgoing)
        except Exception as exc:  # noqa: BLE001
            return HttpResponse(
                ok=False,
                error_message=str(exc) or type(exc).__name__,
                error_category=categorize_exception(exc, http=True),
            )

    def close(self) -> None:
        self._client.close()
