"""CLI command modules."""

from . import extract, sync, versions

__all__ = [
    "extract",
    "sync",
    "versions",
]
