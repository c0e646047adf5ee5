"""
Rate limiting and throttling utilities.

Provides a per-host politeness delay for sequential fetching. The Wayback
Machine throttles clients that walk many captures back to back.
"""

from __future__ import annotations

import asyncio
import random
import time
from collections import defaultdict
from dataclasses import dataclass
from urllib.parse import urlparse


@dataclass
class RateLimitConfig:
    """Configuration for rate limiting."""

    min_delay_ms: int = 0
    max_delay_ms: int = 0


class RateLimiter:
    """Per-host rate limiter with jittered delays."""

    def __init__(self, config: RateLimitConfig | None = None):
        self.config = config or RateLimitConfig()
        self._last_request: dict[str, float] = defaultdict(float)

    def _get_domain(self, url: str) -> str:
        return urlparse(url).netloc

    def _calculate_delay(self) -> float:
        """Calculate jittered delay in seconds."""
        low = self.config.min_delay_ms
        high = max(low, self.config.max_delay_ms)
        return random.randint(low, high) / 1000.0

    async def acquire(self, url: str) -> None:
        """Wait until it's polite to request the URL's host again."""
        domain = self._get_domain(url)
        last = self._last_request[domain]

        if last:
            wait = self._calculate_delay() - (time.monotonic() - last)
            if wait > 0:
                await asyncio.sleep(wait)

        self._last_request[domain] = time.monotonic()
