"""Pooled JSON-over-HTTP client that upstream clients build on."""

from __future__ import annotations

import logging
import time
from typing import Any, Self

import httpx

from notify_relay.utils.retry import retry

logger = logging.getLogger(__name__)

# Failures where the request may never have reached the upstream.
TRANSIENT_ERRORS = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


class BaseHTTPClient:
    """Owns one ``httpx.AsyncClient`` and decodes JSON responses.

    Transport failures get three attempts with a short exponential delay.
    Error statuses raise ``httpx.HTTPStatusError`` on the first response.
    Pass ``transport=httpx.MockTransport(handler)`` to test without a server.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            headers=headers,
            transport=transport,
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=20),
        )

    async def close(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @retry(max_attempts=3, initial_delay=0.5, max_delay=5.0, exceptions=TRANSIENT_ERRORS)
    async def get(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET ``url`` and return the decoded JSON document.

        Raises:
            httpx.HTTPStatusError: The upstream answered 4xx or 5xx.
            RetryError: Every attempt hit a transport error.
            ValueError: The body is not JSON.
        """
        started = time.perf_counter()
        response = await self.client.get(url, params=params)
        logger.debug(
            "GET %s -> %d",
            response.request.url,
            response.status_code,
            extra={
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        response.raise_for_status()
        return response.json()
