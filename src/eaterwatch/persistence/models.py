"""
Version history models.

A VersionHistory is a derived view: it is rebuilt from the archived
captures and the live page on every run, then written out as JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from eaterwatch.core.normalize import RestaurantRecord, compute_fingerprint

LIVE_SNAPSHOT_ID = "live"


@dataclass
class Snapshot:
    """One accepted capture of the list."""

    id: str  # capture timestamp, or "live"
    date: str  # YYYY-MM-DD
    source_url: str
    restaurants: list[RestaurantRecord] = field(default_factory=list)

    @property
    def is_live(self) -> bool:
        return self.id == LIVE_SNAPSHOT_ID

    @property
    def fingerprint(self) -> str:
        return compute_fingerprint(self.restaurants)

    @property
    def slugs(self) -> set[str]:
        return {r.slug for r in self.restaurants}

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "source": self.source_url,
            "restaurants": [r.to_dict() for r in self.restaurants],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Snapshot:
        return cls(
            id=str(data["id"]),
            date=str(data["date"]),
            source_url=str(data.get("source", "")),
            restaurants=[RestaurantRecord.from_dict(r) for r in data.get("restaurants", [])],
        )


@dataclass
class VersionHistory:
    """All accepted snapshots of one list, in capture order."""

    source: str
    versions: list[Snapshot] = field(default_factory=list)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def latest(self) -> Snapshot | None:
        return self.versions[-1] if self.versions else None

    def sorted_by_date(self) -> list[Snapshot]:
        """Versions ordered by date (capture order breaks ties)."""
        return sorted(self.versions, key=lambda v: v.date)

    def to_dict(self) -> dict[str, Any]:
        generated = self.generated_at.astimezone(timezone.utc)
        return {
            "generatedAt": generated.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "source": self.source,
            "versions": [v.to_dict() for v in self.versions],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VersionHistory:
        generated_raw = str(data.get("generatedAt", ""))
        try:
            generated_at = datetime.fromisoformat(generated_raw.replace("Z", "+00:00"))
        except ValueError:
            generated_at = datetime.now(timezone.utc)

        return cls(
            source=str(data.get("source", "")),
            versions=[Snapshot.from_dict(v) for v in data.get("versions", [])],
            generated_at=generated_at,
        )
