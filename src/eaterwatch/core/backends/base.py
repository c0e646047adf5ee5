"""
Backend base classes and data structures.

Defines the interface contract for fetch backends.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class RequestSpec:
    """An HTTP GET request; headers and timeout are set on the backend."""

    url: str


@dataclass
class FetchResult:
    """Result of a fetch operation."""

    url: str
    final_url: str  # After redirects
    status_code: int
    html: str
    headers: dict[str, str]

    elapsed_ms: float
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    retry_count: int = 0

    @property
    def ok(self) -> bool:
        """Check if request was successful (2xx status)."""
        return 200 <= self.status_code < 300

    @property
    def content_length(self) -> int:
        """Get content length in bytes."""
        return len(self.html.encode("utf-8"))


class Backend(ABC):
    """Abstract base class for fetch backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend identifier."""

    @abstractmethod
    async def fetch(self, request: RequestSpec) -> FetchResult:
        """Fetch a URL and return the response.

        Args:
            request: Request to perform

        Returns:
            FetchResult with response data

        Raises:
            FetchError: On transport failure or a non-2xx response
        """

    async def fetch_text(self, url: str) -> str:
        """Fetch a URL and return its body text.

        Raises:
            FetchError: On transport failure or a non-2xx response
        """
        result = await self.fetch(RequestSpec(url=url))
        return result.html

    async def close(self) -> None:
        """Clean up backend resources."""

    async def __aenter__(self) -> "Backend":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


class BackendError(Exception):
    """Base exception for backend errors."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class FetchError(BackendError):
    """Error during fetch operation (transport failure or non-2xx status)."""
