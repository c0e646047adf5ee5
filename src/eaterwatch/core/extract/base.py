"""
Extraction base classes and data structures.

Defines the interface for all extraction strategies. A page format that
does not match is an expected outcome, so extractors report it through a
not-applicable ExtractionResult instead of raising.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable

from eaterwatch.core.normalize import (
    DEFAULT_CITY,
    IdentityResolver,
    RestaurantRecord,
    normalize_restaurants,
)

# Fewer records than this means a partial or unrelated capture
MIN_RESTAURANTS = 30


@dataclass
class ExtractionResult:
    """Result of an extraction operation."""

    records: list[RestaurantRecord] = field(default_factory=list)
    extraction_method: str | None = None
    applicable: bool = True

    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Check if extraction produced a usable record list."""
        return self.applicable and len(self.records) > 0

    @property
    def record_count(self) -> int:
        return len(self.records)

    @classmethod
    def not_applicable(cls, method: str, reason: str) -> ExtractionResult:
        """Build the result for a page this extractor cannot read."""
        return cls(extraction_method=method, applicable=False, errors=[f"{method}: {reason}"])

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)


class Extractor(ABC):
    """Abstract base class for extraction strategies."""

    def __init__(
        self,
        *,
        min_restaurants: int = MIN_RESTAURANTS,
        resolver: IdentityResolver | None = None,
        default_city: str = DEFAULT_CITY,
    ) -> None:
        self.min_restaurants = min_restaurants
        self.resolver = resolver or IdentityResolver()
        self.default_city = default_city

    @property
    @abstractmethod
    def name(self) -> str:
        """Extractor identifier."""

    @abstractmethod
    def extract(self, html: str, url: str | None = None) -> ExtractionResult:
        """Extract restaurant records from page content.

        Args:
            html: Raw page content
            url: Source URL for context

        Returns:
            ExtractionResult; not applicable when the format is absent
        """

    def normalize(self, raw_items: Iterable[dict[str, Any]]) -> list[RestaurantRecord]:
        """Run raw records through the shared record normalizer."""
        return normalize_restaurants(
            raw_items,
            resolver=self.resolver,
            default_city=self.default_city,
        )

    def _not_applicable(self, reason: str) -> ExtractionResult:
        return ExtractionResult.not_applicable(self.name, reason)


def dig(data: Any, *path: str | int) -> Any:
    """Follow a path of dict keys / list indexes, returning None when absent."""
    current = data
    for part in path:
        if isinstance(part, int):
            if isinstance(current, list) and -len(current) <= part < len(current):
                current = current[part]
            else:
                return None
        elif isinstance(current, dict):
            current = current.get(part)
        else:
            return None
    return current


def first_text(*values: Any) -> str:
    """Return the first non-empty string among values."""
    for value in values:
        if isinstance(value, str) and value.strip():
            return value
    return ""
