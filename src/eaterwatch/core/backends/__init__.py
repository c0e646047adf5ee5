"""Backend implementations for fetching pages."""

from .base import (
    Backend,
    BackendError,
    FetchError,
    FetchResult,
    RequestSpec,
)
from .http_backend import HttpBackend

__all__ = [
    # Base classes
    "Backend",
    "RequestSpec",
    "FetchResult",
    # Errors
    "BackendError",
    "FetchError",
    # HTTP backend
    "HttpBackend",
]
