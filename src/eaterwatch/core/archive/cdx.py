"""
Wayback Machine capture index (CDX) helpers.

The CDX server lists captures of a URL as JSON rows
``[timestamp, original, statuscode]`` after a header row. Each capture is
then retrieved through the ``id_`` snapshot URL, which serves the archived
bytes without the Wayback toolbar rewriting.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from urllib.parse import urlencode

logger = logging.getLogger(__name__)

DEFAULT_CDX_ENDPOINT = "https://web.archive.org/cdx/search/cdx"
DEFAULT_SNAPSHOT_TEMPLATE = "https://web.archive.org/web/{timestamp}id_/{url}"

_TIMESTAMP = re.compile(r"^\d{14}$")


class CaptureIndexError(ValueError):
    """The capture index response could not be read."""


@dataclass(frozen=True)
class CaptureRow:
    """One archived capture of the target URL."""

    timestamp: str  # YYYYMMDDhhmmss
    original: str
    status_code: str = "200"

    @property
    def date(self) -> str:
        return timestamp_to_date(self.timestamp)

    def archived_url(self, target: str, template: str = DEFAULT_SNAPSHOT_TEMPLATE) -> str:
        return archived_url(self.timestamp, target, template)


def build_cdx_url(
    target: str,
    *,
    endpoint: str = DEFAULT_CDX_ENDPOINT,
    from_year: int | None = 2017,
    collapse: str | None = "timestamp:6",
) -> str:
    """Build the CDX query listing successful captures of ``target``."""
    params = {
        "url": target,
        "output": "json",
        "fl": "timestamp,original,statuscode",
        "filter": "statuscode:200",
    }
    if collapse:
        params["collapse"] = collapse
    if from_year:
        params["from"] = str(from_year)
    return f"{endpoint}?{urlencode(params)}"


def parse_cdx_response(text: str) -> list[CaptureRow]:
    """Parse a CDX JSON response into capture rows.

    The header row, non-200 rows and rows with malformed timestamps are
    dropped. An empty body means no captures.

    Raises:
        CaptureIndexError: If the body is not a JSON list of rows
    """
    if not text.strip():
        return []

    try:
        rows = json.loads(text)
    except json.JSONDecodeError as e:
        raise CaptureIndexError(f"Capture index is not JSON: {e}") from e

    if not isinstance(rows, list):
        raise CaptureIndexError("Capture index is not a list of rows")

    captures: list[CaptureRow] = []
    for row in rows[1:]:
        if not isinstance(row, list) or len(row) < 2:
            logger.debug("Skipping malformed capture row: %r", row)
            continue

        timestamp, original = str(row[0]), str(row[1])
        status = str(row[2]) if len(row) > 2 else "200"

        if status != "200":
            continue
        if not _TIMESTAMP.match(timestamp):
            logger.debug("Skipping capture with bad timestamp: %r", timestamp)
            continue

        captures.append(CaptureRow(timestamp=timestamp, original=original, status_code=status))

    return captures


def archived_url(timestamp: str, target: str, template: str = DEFAULT_SNAPSHOT_TEMPLATE) -> str:
    """Retrieval URL for the capture of ``target`` at ``timestamp``."""
    return template.format(timestamp=timestamp, url=target)


def timestamp_to_date(timestamp: str) -> str:
    """Convert a 14-digit capture timestamp to ``YYYY-MM-DD``.

    Raises:
        ValueError: If the timestamp does not start with a valid date
    """
    return datetime.strptime(timestamp[:8], "%Y%m%d").date().isoformat()
