"""Wayback Machine capture index access."""

from .cdx import (
    DEFAULT_CDX_ENDPOINT,
    DEFAULT_SNAPSHOT_TEMPLATE,
    CaptureIndexError,
    CaptureRow,
    archived_url,
    build_cdx_url,
    parse_cdx_response,
    timestamp_to_date,
)

__all__ = [
    "DEFAULT_CDX_ENDPOINT",
    "DEFAULT_SNAPSHOT_TEMPLATE",
    "CaptureIndexError",
    "CaptureRow",
    "archived_url",
    "build_cdx_url",
    "parse_cdx_response",
    "timestamp_to_date",
]
