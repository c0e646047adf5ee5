"""
Extraction pipeline for stacking the page-format strategies.

Tries the inlined map points, then JSON-LD, then the Next.js hydration
payload. Newer formats come first because they carry more fields.
"""

from __future__ import annotations

import logging

from eaterwatch.core.normalize import DEFAULT_CITY, IdentityResolver, RestaurantRecord

from .base import MIN_RESTAURANTS, ExtractionResult, Extractor
from .hydration import HydrationExtractor
from .map_points import MapPointsExtractor
from .structured import StructuredDataExtractor

logger = logging.getLogger(__name__)


class ExtractionPipeline(Extractor):
    """Pipeline of extraction strategies with fallback logic."""

    def __init__(
        self,
        extractors: list[Extractor] | None = None,
        *,
        min_restaurants: int = MIN_RESTAURANTS,
        resolver: IdentityResolver | None = None,
        default_city: str = DEFAULT_CITY,
    ) -> None:
        """Initialize the extraction pipeline.

        Args:
            extractors: Optional list of extractors (default chain if None)
            min_restaurants: Minimum records for a plausible snapshot
            resolver: Identity resolver shared by the default chain
            default_city: City injected by the address normalizer
        """
        super().__init__(
            min_restaurants=min_restaurants,
            resolver=resolver,
            default_city=default_city,
        )
        options = {
            "min_restaurants": self.min_restaurants,
            "resolver": self.resolver,
            "default_city": self.default_city,
        }
        self.extractors = extractors or [
            MapPointsExtractor(**options),
            StructuredDataExtractor(**options),
            HydrationExtractor(**options),
        ]

    @property
    def name(self) -> str:
        return "pipeline"

    def extract(self, html: str, url: str | None = None) -> ExtractionResult:
        """Try extractors in order until one succeeds.

        Args:
            html: Page content
            url: Source URL

        Returns:
            ExtractionResult from the first successful extractor, or a
            not-applicable result listing why each one declined
        """
        all_warnings: list[str] = []
        all_errors: list[str] = []

        for extractor in self.extractors:
            result = extractor.extract(html, url)
            all_warnings.extend(result.warnings)

            if result.ok:
                result.warnings = all_warnings
                result.errors = all_errors
                logger.debug(
                    "%s extracted %d restaurants from %s",
                    extractor.name, result.record_count, url or "page",
                )
                return result

            all_errors.extend(result.errors)

        return ExtractionResult(
            extraction_method="pipeline_failed",
            applicable=False,
            warnings=all_warnings,
            errors=["All extraction strategies failed", *all_errors],
        )

    def extract_restaurants(self, html: str, url: str | None = None) -> list[RestaurantRecord] | None:
        """Return the first extractor's records, or None if none applies."""
        result = self.extract(html, url)
        return result.records if result.ok else None
