"""
HTTP Backend implementation using httpx.

Provides async HTTP fetching with:
- Automatic redirect following
- Optional retry with exponential backoff on transport errors
- Optional per-host politeness delay
"""

from __future__ import annotations

import logging
import time

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from eaterwatch.core.fetch.throttling import RateLimiter

from .base import Backend, FetchError, FetchResult, RequestSpec

logger = logging.getLogger(__name__)


DEFAULT_USER_AGENT = "eaterwatch/0.1 (+https://github.com/eaterwatch/eaterwatch)"


class HttpBackend(Backend):
    """HTTP backend using httpx for async requests.

    Non-2xx responses raise FetchError. Only transport errors are retried,
    and only when max_attempts > 1.
    """

    def __init__(
        self,
        timeout: float = 60.0,
        max_attempts: int = 1,
        user_agent: str | None = None,
        default_headers: dict[str, str] | None = None,
        rate_limiter: RateLimiter | None = None,
    ):
        """Initialize HTTP backend.

        Args:
            timeout: Default request timeout in seconds
            max_attempts: Attempts per request for transport errors
            user_agent: Custom user agent
            default_headers: Default headers for all requests
            rate_limiter: Politeness delay applied before each request
        """
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self.rate_limiter = rate_limiter

        self.default_headers = {
            "User-Agent": user_agent or DEFAULT_USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/json;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-CA,en;q=0.9",
            **(default_headers or {}),
        }

        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        return "http"

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                headers=self.default_headers,
            )
        return self._client

    async def fetch(self, request: RequestSpec) -> FetchResult:
        """Fetch a URL.

        Args:
            request: Request to perform

        Returns:
            FetchResult with response data

        Raises:
            FetchError: On transport failure or non-2xx status
        """
        client = await self._ensure_client()
        retry_count = 0

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=1, min=1, max=30),
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    retry_count = attempt.retry_state.attempt_number - 1

                    if self.rate_limiter is not None:
                        await self.rate_limiter.acquire(request.url)

                    start = time.perf_counter()
                    response = await client.get(request.url)
                    elapsed_ms = (time.perf_counter() - start) * 1000
        except httpx.HTTPError as e:
            raise FetchError(
                f"Transport error after {retry_count + 1} attempt(s): {e}",
                url=request.url,
                cause=e,
            ) from e

        if not response.is_success:
            raise FetchError(
                f"HTTP {response.status_code} for {request.url}",
                url=request.url,
                status_code=response.status_code,
            )

        logger.debug("Fetched %s (%d bytes, %.0f ms)", request.url, len(response.content), elapsed_ms)

        return FetchResult(
            url=request.url,
            final_url=str(response.url),
            status_code=response.status_code,
            html=response.text,
            headers=dict(response.headers),
            elapsed_ms=elapsed_ms,
            retry_count=retry_count,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
