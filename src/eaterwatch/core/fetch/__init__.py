"""Fetch utilities - throttling."""

from .throttling import RateLimitConfig, RateLimiter

__all__ = [
    "RateLimitConfig",
    "RateLimiter",
]
