"""Extraction strategies for the page formats the list has used."""

from .base import MIN_RESTAURANTS, ExtractionResult, Extractor
from .hydration import HydrationExtractor
from .map_points import MapDescription, MapPointsExtractor, parse_map_description
from .pipeline import ExtractionPipeline
from .scanner import find_json_array, find_matching_bracket
from .structured import StructuredDataExtractor

__all__ = [
    "MIN_RESTAURANTS",
    "Extractor",
    "ExtractionResult",
    "MapPointsExtractor",
    "MapDescription",
    "parse_map_description",
    "StructuredDataExtractor",
    "HydrationExtractor",
    "ExtractionPipeline",
    "find_json_array",
    "find_matching_bracket",
]
