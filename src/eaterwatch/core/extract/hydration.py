"""
Extractor for the Next.js hydration payload.

One generation of the page was rendered with Next.js and shipped its GraphQL
responses in ``<script id="__NEXT_DATA__">``. The map points sit at a fixed
position in those responses.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from .base import ExtractionResult, Extractor, dig, first_text

logger = logging.getLogger(__name__)

NEXT_DATA_MARKER = '<script id="__NEXT_DATA__" type="application/json">'
SCRIPT_END = "</script>"

# props.pageProps.hydration.responses[2].data.node.mapPoints
MAP_POINTS_PATH: tuple[str | int, ...] = (
    "props", "pageProps", "hydration", "responses", 2, "data", "node", "mapPoints",
)


def hydration_point_to_raw(point: dict[str, Any]) -> dict[str, Any]:
    """Convert one hydrated map point to a raw record dict."""
    return {
        "name": point.get("name"),
        "address": point.get("address"),
        "source_url": first_text(point.get("url")),
        "website": first_text(dig(point, "venue", "website")),
    }


class HydrationExtractor(Extractor):
    """Extractor for map points inside ``__NEXT_DATA__``."""

    @property
    def name(self) -> str:
        return "next_data"

    def extract(self, html: str, url: str | None = None) -> ExtractionResult:
        html = html or ""
        start = html.find(NEXT_DATA_MARKER)
        if start == -1:
            return self._not_applicable("no __NEXT_DATA__ script")

        end = html.find(SCRIPT_END, start)
        if end == -1:
            return self._not_applicable("unterminated __NEXT_DATA__ script")

        try:
            payload = json.loads(html[start + len(NEXT_DATA_MARKER) : end])
        except (json.JSONDecodeError, RecursionError) as e:
            logger.debug("Malformed __NEXT_DATA__ in %s: %s", url or "page", e)
            return self._not_applicable(f"malformed JSON: {e}")

        points = dig(payload, *MAP_POINTS_PATH)
        if not isinstance(points, list):
            return self._not_applicable("map points path missing")
        if len(points) < self.min_restaurants:
            return self._not_applicable(
                f"{len(points)} map points, need {self.min_restaurants}"
            )

        records = self.normalize(
            hydration_point_to_raw(point) for point in points if isinstance(point, dict)
        )
        return ExtractionResult(records=records, extraction_method=self.name)
