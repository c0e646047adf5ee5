"""Shared fixtures: synthetic pages in each historical format."""

from __future__ import annotations

import json
from typing import Any, Callable

import pytest

TARGET_URL = "https://www.eater.com/maps/best-vancouver-restaurants-bc-canada"


def restaurant_names(count: int, prefix: str = "Restaurant") -> list[str]:
    return [f"{prefix} {i:02d}" for i in range(count)]


def _map_point(name: str, index: int, blurb: str) -> dict[str, Any]:
    return {
        "name": name,
        "address": f"{100 + index} Main Street, Vancouver, BC V5T 3E{index % 10}",
        "eaterUrl": f"https://vancouver.eater.com/venue/{index}",
        "url": f"https://restaurant{index}.example.com",
        "venue": {"phone": f"(604) 555-{1000 + index}"},
        "description": [
            {"plaintext": f"{blurb} #{index}."},
            {"plaintext": "Open for: Dinner"},
            {"plaintext": "Price range: $$"},
        ],
        "ledeMedia": {
            "image": {
                "thumbnails": {
                    "horizontal": {"url": f"https://cdn.example.com/{index}-h.jpg"},
                    "square": {"url": f"https://cdn.example.com/{index}-s.jpg"},
                }
            }
        },
        "location": {"latitude": 49.26 + index / 1000, "longitude": -123.1 - index / 1000},
    }


@pytest.fixture
def map_points_page() -> Callable[..., str]:
    """Factory for pages that inline a ``"mapPoints":[...]`` array."""

    def build(names: list[str], blurb: str = "Worth the trip") -> str:
        points = [_map_point(name, i, blurb) for i, name in enumerate(names)]
        state = {"entry": {"title": "The 38 Essential Vancouver Restaurants", "mapPoints": points}}
        return (
            "<!DOCTYPE html><html><head><title>Essential Vancouver</title></head><body>"
            f"<script>window.__STATE__ = {json.dumps(state, separators=(',', ':'))};</script>"
            "</body></html>"
        )

    return build


@pytest.fixture
def jsonld_page() -> Callable[..., str]:
    """Factory for pages exposing the list as a JSON-LD ItemList."""

    def build(*lists: list[str], malformed_block: bool = False) -> str:
        blocks = []
        if malformed_block:
            blocks.append('<script type="application/ld+json">{not json</script>')
        blocks.append(
            '<script type="application/ld+json">'
            + json.dumps({"@context": "https://schema.org", "@type": "WebPage", "name": "Essential"})
            + "</script>"
        )
        for names in lists:
            item_list = {
                "@context": "https://schema.org",
                "@type": "ItemList",
                "itemListElement": [
                    {
                        "@type": "ListItem",
                        "position": i + 1,
                        "item": {
                            "@type": "Restaurant",
                            "name": name,
                            "url": f"https://vancouver.eater.com/venue/{i}",
                            "address": {
                                "@type": "PostalAddress",
                                "streetAddress": f"{200 + i} Robson Street, Vancouver, British Columbia, Canada",
                            },
                        },
                    }
                    for i, name in enumerate(names)
                ],
            }
            blocks.append(f'<script type="application/ld+json">{json.dumps(item_list)}</script>')
        return f"<html><head>{''.join(blocks)}</head><body><h1>Essential</h1></body></html>"

    return build


@pytest.fixture
def next_data_page() -> Callable[..., str]:
    """Factory for pages carrying map points in ``__NEXT_DATA__``."""

    def build(names: list[str]) -> str:
        points = [
            {
                "name": name,
                "address": f"{300 + i} Granville St Vancouver BC",
                "url": f"https://vancouver.eater.com/venue/{i}",
                "venue": {"website": f"https://venue{i}.example.com"},
            }
            for i, name in enumerate(names)
        ]
        payload = {
            "props": {
                "pageProps": {
                    "hydration": {
                        "responses": [
                            {"data": {}},
                            {"data": {"site": "eater"}},
                            {"data": {"node": {"mapPoints": points}}},
                        ]
                    }
                }
            }
        }
        return (
            "<html><body><div id=\"__next\"></div>"
            f'<script id="__NEXT_DATA__" type="application/json">{json.dumps(payload)}</script>'
            "<script>console.log('done')</script></body></html>"
        )

    return build


@pytest.fixture
def make_names() -> Callable[..., list[str]]:
    return restaurant_names


@pytest.fixture
def target_url() -> str:
    return TARGET_URL
