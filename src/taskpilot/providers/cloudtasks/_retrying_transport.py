"""httpx async transport wrapper that retries transient Cloud Tasks failures."""

from __future__ import annotations

import asyncio
import logging
import random

import httpx

_LOG = logging.getLogger(__name__)

# RESOURCE_EXHAUSTED, UNAVAILABLE and DEADLINE_EXCEEDED surface as these.
_RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})

# Reads can be replayed after any failure. A replayed create or delete that
# already landed comes back as ALREADY_EXISTS or NOT_FOUND.
_READ_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


class RetryingTransport(httpx.AsyncBaseTransport):
    """Wraps an httpx async transport with bounded retries.

    Reads (``listTasks``) are retried on any transport error and on
    429/502/503/504. Mutations (``createTask``, ``deleteTask``) are retried
    only when the connection was never established or the server answered
    429: in both cases the request was not applied. After a timeout the
    outcome is unknown, so the error propagates and the next sync recomputes
    from the queue.

    Waits use exponential backoff with jitter, capped at *max_backoff*; a
    ``Retry-After`` header on the response takes precedence when longer.
    """

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        max_retries: int = 3,
        max_backoff: float = 8.0,
    ) -> None:
        self._transport = transport or httpx.AsyncHTTPTransport()
        self._max_retries = max_retries
        self._max_backoff = max_backoff

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        read = request.method in _READ_METHODS
        attempt = 0
        while True:
            try:
                response = await self._transport.handle_async_request(request)
            except httpx.TransportError as exc:
                if attempt >= self._max_retries or not (read or isinstance(exc, httpx.ConnectError)):
                    raise
                _LOG.warning("%s %s failed (%s); retrying", request.method, request.url.path, exc)
                await self._sleep_backoff(attempt, self._max_backoff)
                attempt += 1
                continue

            if attempt >= self._max_retries or not self._should_retry(response.status_code, read=read):
                return response

            retry_after = self._parse_retry_after(response)
            await response.aclose()
            _LOG.warning(
                "%s %s returned HTTP %d; retrying", request.method, request.url.path, response.status_code
            )
            await self._sleep_backoff(attempt, self._max_backoff, minimum=retry_after)
            attempt += 1

    async def aclose(self) -> None:
        await self._transport.aclose()

    @staticmethod
    def _should_retry(status_code: int, *, read: bool) -> bool:
        if status_code == 429:
            return True
        return read and status_code in _RETRYABLE_STATUS_CODES

    @staticmethod
    def _parse_retry_after(response: httpx.Response) -> float:
        raw = response.headers.get("Retry-After")
        if raw is None:
            return 0.0
        try:
            return max(0.0, float(raw))
        except ValueError:
            return 0.0

    @staticmethod
    async def _sleep_backoff(attempt: int, cap: float, *, minimum: float = 0.0) -> None:
        seconds = max(minimum, min(cap, float(2**attempt)) + random.uniform(0.0, 0.25))
        _LOG.debug("Backing off %.2fs before attempt %d", seconds, attempt + 2)
        await asyncio.sleep(seconds)
