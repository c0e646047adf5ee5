"""
Extractor for the inlined ``mapPoints`` array.

Current page versions embed the map data as a ``"mapPoints":[...]`` array
inside a larger script payload. This is the richest format: it carries
phone numbers, blurbs, photos and coordinates.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from .base import ExtractionResult, Extractor, dig, first_text
from .scanner import find_json_array

logger = logging.getLogger(__name__)

MAP_POINTS_KEY = "mapPoints"

_OPEN_FOR = re.compile(r"^Open for:\s*", re.IGNORECASE)
_PRICE_RANGE = re.compile(r"^Price range:\s*", re.IGNORECASE)

# Thumbnail shapes in order of preference
THUMBNAIL_SHAPES = ("horizontal", "square", "vertical")


@dataclass
class MapDescription:
    """Structured parts of a map point's description fragments."""

    open_for: str = ""
    price_range: str = ""
    description_text: str = ""


def parse_map_description(description: Any) -> MapDescription:
    """Split description fragments into open-for, price range and free text.

    Args:
        description: List of ``{"plaintext": ...}`` fragments

    Returns:
        MapDescription; free-text fragments are joined by single spaces
    """
    parts: list[str] = []
    if isinstance(description, list):
        for fragment in description:
            text = fragment.get("plaintext") if isinstance(fragment, dict) else None
            if isinstance(text, str) and text:
                parts.append(text)

    parsed = MapDescription()
    lines: list[str] = []

    for part in parts:
        if _OPEN_FOR.match(part):
            parsed.open_for = _OPEN_FOR.sub("", part).strip()
        elif _PRICE_RANGE.match(part):
            parsed.price_range = _PRICE_RANGE.sub("", part).strip()
        else:
            lines.append(part.strip())

    parsed.description_text = " ".join(line for line in lines if line)
    return parsed


def map_point_to_raw(point: dict[str, Any]) -> dict[str, Any]:
    """Convert one map point to a raw record dict."""
    description = parse_map_description(point.get("description"))
    venue = point.get("venue") if isinstance(point.get("venue"), dict) else {}
    thumbnails = dig(point, "ledeMedia", "image", "thumbnails")

    return {
        "name": point.get("name"),
        "address": point.get("address"),
        "source_url": point.get("eaterUrl"),
        "website": first_text(point.get("url"), venue.get("website")),
        "phone": first_text(point.get("phone"), venue.get("phone"), venue.get("telephone")),
        "open_for": description.open_for,
        "price_range": description.price_range,
        "description_text": description.description_text,
        "image_url": first_text(*(dig(thumbnails, shape, "url") for shape in THUMBNAIL_SHAPES)),
        "latitude": dig(point, "location", "latitude"),
        "longitude": dig(point, "location", "longitude"),
    }


class MapPointsExtractor(Extractor):
    """Extractor for the ``"mapPoints":[...]`` literal embedded in the page."""

    @property
    def name(self) -> str:
        return "map_points"

    def extract(self, html: str, url: str | None = None) -> ExtractionResult:
        array_text = find_json_array(html or "", MAP_POINTS_KEY)
        if array_text is None:
            return self._not_applicable(f'no "{MAP_POINTS_KEY}" array found')

        try:
            points = json.loads(array_text)
        except (json.JSONDecodeError, RecursionError) as e:
            logger.debug("Malformed %s array in %s: %s", MAP_POINTS_KEY, url or "page", e)
            return self._not_applicable(f"malformed JSON: {e}")

        usable = [p for p in points if isinstance(p, dict)] if isinstance(points, list) else []
        if len(usable) < self.min_restaurants:
            return self._not_applicable(
                f"{len(usable)} map points, need {self.min_restaurants}"
            )

        records = self.normalize(map_point_to_raw(point) for point in usable)
        return ExtractionResult(records=records, extraction_method=self.name)
