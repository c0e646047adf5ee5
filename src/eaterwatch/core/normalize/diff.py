"""
Fingerprinting and diff computation for change tracking.

A snapshot's fingerprint covers only which restaurants are on the list.
Renamed addresses or rewritten blurbs do not count as a new version.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .canonical import RestaurantRecord


def compute_fingerprint(records: Iterable[RestaurantRecord]) -> str:
    """Compute a membership fingerprint for a snapshot.

    Args:
        records: Normalized records of one snapshot

    Returns:
        32-character hex fingerprint of the sorted slug list
    """
    slugs = sorted(record.slug for record in records)
    payload = json.dumps(slugs, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:32]


def is_duplicate(fingerprint: str, previous: str | None) -> bool:
    """Check whether a snapshot repeats the previously accepted one."""
    return previous is not None and fingerprint == previous


@dataclass
class VersionDiff:
    """Restaurants added and removed between two versions."""

    added: list[RestaurantRecord] = field(default_factory=list)
    removed: list[RestaurantRecord] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed)

    @property
    def summary(self) -> str:
        if not self.has_changes:
            return "No changes"
        return f"+{len(self.added)} / -{len(self.removed)}"


def compute_version_diff(
    current: Sequence[RestaurantRecord],
    previous: Sequence[RestaurantRecord] | None = None,
) -> VersionDiff:
    """Compute restaurants added/removed by slug.

    With no previous version everything counts as added.
    """
    if previous is None:
        return VersionDiff(added=list(current), removed=[])

    previous_slugs = {r.slug for r in previous}
    current_slugs = {r.slug for r in current}

    return VersionDiff(
        added=[r for r in current if r.slug not in previous_slugs],
        removed=[r for r in previous if r.slug not in current_slugs],
    )


def build_frequency(
    versions: Iterable[Sequence[RestaurantRecord]],
) -> dict[str, tuple[str, int]]:
    """Count in how many versions each restaurant appears.

    Returns:
        Mapping of slug to (first seen name, count)
    """
    counts: dict[str, tuple[str, int]] = {}
    for restaurants in versions:
        for record in restaurants:
            name, count = counts.get(record.slug, (record.name, 0))
            counts[record.slug] = (name, count + 1)
    return counts
