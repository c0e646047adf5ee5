"""
JSON file store for the version history artifact.
"""

from __future__ import annotations

import logging
from pathlib import Path

import orjson

from .models import VersionHistory

logger = logging.getLogger(__name__)


class HistoryStoreError(Exception):
    """Version history file could not be read."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(message)


def write_history(history: VersionHistory, path: Path | str) -> Path:
    """Write the version history as indented JSON.

    Args:
        history: History to persist
        path: Target file (parent directories are created)

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = orjson.dumps(history.to_dict(), option=orjson.OPT_INDENT_2)
    path.write_bytes(payload + b"\n")

    logger.info("Saved %d unique versions to %s", len(history.versions), path)
    return path


def load_history(path: Path | str) -> VersionHistory:
    """Load a version history written by write_history().

    Raises:
        HistoryStoreError: If the file is missing or malformed
    """
    path = Path(path)
    if not path.exists():
        raise HistoryStoreError(f"History file not found: {path}", path=path)

    try:
        data = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as e:
        raise HistoryStoreError(f"Invalid JSON in {path}: {e}", path=path) from e

    try:
        return VersionHistory.from_dict(data)
    except (KeyError, TypeError, AttributeError) as e:
        raise HistoryStoreError(f"Unexpected history layout in {path}: {e}", path=path) from e
