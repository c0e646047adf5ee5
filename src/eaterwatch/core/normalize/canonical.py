"""
Canonical restaurant model for normalized data.

Provides a clean interface between raw extraction and the version history.
Extractors produce raw record dicts; normalize_restaurants() turns a batch
of them into the deduplicated, sorted list stored for one snapshot.
"""

from __future__ import annotations

import math
import unicodedata
from dataclasses import dataclass, fields
from typing import Any, Iterable

from .address import DEFAULT_CITY, normalize_address
from .identity import IdentityResolver

# Optional text fields: (attribute, JSON key)
TEXT_FIELDS: tuple[tuple[str, str], ...] = (
    ("address", "address"),
    ("source_url", "sourceUrl"),
    ("website", "website"),
    ("phone", "phone"),
    ("open_for", "openFor"),
    ("price_range", "priceRange"),
    ("description_text", "descriptionText"),
    ("image_url", "imageUrl"),
)


@dataclass
class RestaurantRecord:
    """Normalized restaurant entry of one snapshot.

    ``slug`` is the entity key across the whole history.
    Coordinates are either both set or both None.
    """

    name: str
    slug: str
    address: str = ""
    source_url: str = ""
    website: str = ""
    phone: str = ""
    open_for: str = ""
    price_range: str = ""
    description_text: str = ""
    image_url: str = ""
    latitude: float | None = None
    longitude: float | None = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def merge_missing(self, other: RestaurantRecord) -> RestaurantRecord:
        """Return a copy with empty fields filled from ``other``."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for attr, _ in TEXT_FIELDS:
            if not values[attr]:
                values[attr] = getattr(other, attr)
        if not self.has_coordinates and other.has_coordinates:
            values["latitude"] = other.latitude
            values["longitude"] = other.longitude
        return RestaurantRecord(**values)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the artifact's JSON shape."""
        data: dict[str, Any] = {"name": self.name, "slug": self.slug}
        for attr, key in TEXT_FIELDS:
            data[key] = getattr(self, attr)
        if self.has_coordinates:
            data["latitude"] = self.latitude
            data["longitude"] = self.longitude
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RestaurantRecord:
        """Build a record from the artifact's JSON shape."""
        latitude, longitude = _coordinates(data.get("latitude"), data.get("longitude"))
        return cls(
            name=str(data.get("name", "")),
            slug=str(data.get("slug", "")),
            latitude=latitude,
            longitude=longitude,
            **{attr: _text(data.get(key)) for attr, key in TEXT_FIELDS},
        )


def normalize_restaurants(
    raw_items: Iterable[dict[str, Any]],
    *,
    resolver: IdentityResolver | None = None,
    default_city: str = DEFAULT_CITY,
) -> list[RestaurantRecord]:
    """Normalize raw extracted records into one snapshot's restaurant list.

    Items without a usable name are dropped. Records sharing a canonical
    slug are merged: the first one wins, later ones only fill its gaps.

    Args:
        raw_items: Raw record dicts from an extractor
        resolver: Identity resolver (built-in tables if None)
        default_city: City injected by the address normalizer

    Returns:
        Records sorted by name
    """
    resolver = resolver or IdentityResolver()
    by_slug: dict[str, RestaurantRecord] = {}

    for item in raw_items:
        record = normalize_record(item, resolver=resolver, default_city=default_city)
        if record is None:
            continue

        existing = by_slug.get(record.slug)
        by_slug[record.slug] = existing.merge_missing(record) if existing else record

    return sorted(by_slug.values(), key=sort_key)


def normalize_record(
    item: dict[str, Any],
    *,
    resolver: IdentityResolver,
    default_city: str = DEFAULT_CITY,
) -> RestaurantRecord | None:
    """Normalize a single raw record, or None if it has no usable name."""
    if not isinstance(item, dict):
        return None

    identity = resolver.resolve(_text(item.get("name")))
    if not identity.name or not identity.slug:
        return None

    latitude, longitude = _coordinates(item.get("latitude"), item.get("longitude"))

    return RestaurantRecord(
        name=identity.name,
        slug=identity.slug,
        address=normalize_address(_text(item.get("address")), default_city=default_city),
        source_url=_text(item.get("source_url")),
        website=_text(item.get("website")),
        phone=resolver.phone_for(identity.slug, _text(item.get("phone"))),
        open_for=_text(item.get("open_for")),
        price_range=_text(item.get("price_range")),
        description_text=_text(item.get("description_text")),
        image_url=_text(item.get("image_url")),
        latitude=latitude,
        longitude=longitude,
    )


def sort_key(record: RestaurantRecord) -> tuple[str, str, str]:
    """Case- and accent-insensitive name ordering with stable tie-breaks."""
    folded = unicodedata.normalize("NFKD", record.name)
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch)).casefold()
    return (folded, record.name, record.slug)


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    return ""


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _coordinates(latitude: Any, longitude: Any) -> tuple[float | None, float | None]:
    if _is_number(latitude) and _is_number(longitude):
        return float(latitude), float(longitude)
    return None, None
