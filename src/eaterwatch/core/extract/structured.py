"""
Structured data extractor for JSON-LD ``ItemList`` markup.

Older page versions only exposed the list as schema.org JSON-LD: one
``ItemList`` whose ``itemListElement`` entries carry name, address and URL.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from lxml import etree
from lxml import html as lxml_html

from .base import ExtractionResult, Extractor, first_text

logger = logging.getLogger(__name__)

JSONLD_SELECTOR = 'script[type="application/ld+json"]'


def _payload_entries(data: Any) -> list[dict[str, Any]]:
    """Flatten a decoded JSON-LD payload into its top-level objects."""
    if isinstance(data, dict) and isinstance(data.get("@graph"), list):
        items = data["@graph"]
    elif isinstance(data, list):
        items = data
    else:
        items = [data]
    return [item for item in items if isinstance(item, dict)]


def _is_item_list(entry: dict[str, Any]) -> bool:
    schema_type = entry.get("@type")
    if isinstance(schema_type, list):
        return "ItemList" in schema_type
    return schema_type == "ItemList"


def _address_text(address: Any) -> str:
    if isinstance(address, dict):
        return first_text(address.get("streetAddress"), address.get("name"))
    return first_text(address)


def list_item_to_raw(element: Any) -> dict[str, Any] | None:
    """Convert one ``itemListElement`` entry to a raw record dict."""
    item = element.get("item") if isinstance(element, dict) else None
    if not isinstance(item, dict):
        item = element
    if not isinstance(item, dict) or not isinstance(item.get("name"), str):
        return None

    return {
        "name": item["name"],
        "address": _address_text(item.get("address")),
        "source_url": first_text(item.get("url")),
    }


class StructuredDataExtractor(Extractor):
    """Extractor for JSON-LD ``ItemList`` blocks.

    Every ItemList with enough items is a candidate; the one yielding the
    most normalized records wins.
    """

    @property
    def name(self) -> str:
        return "jsonld"

    def extract(self, html: str, url: str | None = None) -> ExtractionResult:
        if not html or not html.strip():
            return self._not_applicable("empty document")

        try:
            tree = lxml_html.fromstring(html)
        except (etree.ParserError, ValueError) as e:
            return self._not_applicable(f"HTML parse error: {e}")

        candidates: list[list] = []
        skipped = 0

        for script in tree.cssselect(JSONLD_SELECTOR):
            text = script.text_content().strip()
            if not text:
                continue

            try:
                data = json.loads(text)
            except (json.JSONDecodeError, RecursionError):
                skipped += 1
                continue

            for entry in _payload_entries(data):
                elements = entry.get("itemListElement")
                if not _is_item_list(entry) or not isinstance(elements, list):
                    continue

                raw_items = [raw for raw in map(list_item_to_raw, elements) if raw]
                if len(raw_items) >= self.min_restaurants:
                    candidates.append(self.normalize(raw_items))

        if skipped:
            logger.debug("Skipped %d malformed JSON-LD block(s) in %s", skipped, url or "page")

        if not candidates:
            return self._not_applicable(
                f"no ItemList with at least {self.min_restaurants} items"
            )

        best = max(candidates, key=len)
        result = ExtractionResult(records=best, extraction_method=self.name)
        if skipped:
            result.add_warning(f"{skipped} malformed JSON-LD block(s) skipped")
        return result
