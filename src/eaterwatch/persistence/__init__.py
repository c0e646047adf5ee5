"""Version history persistence layer."""

from .models import LIVE_SNAPSHOT_ID, Snapshot, VersionHistory
from .store import HistoryStoreError, load_history, write_history

__all__ = [
    "LIVE_SNAPSHOT_ID",
    "Snapshot",
    "VersionHistory",
    "HistoryStoreError",
    "load_history",
    "write_history",
]
