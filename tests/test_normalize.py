"""Tests for slugs, addresses, identity resolution and record normalization."""

from __future__ import annotations

import math

import pytest

from eaterwatch.core.normalize import (
    CanonicalIdentity,
    IdentityResolver,
    RestaurantRecord,
    normalize_address,
    normalize_restaurants,
    slugify,
)


# ---------------------------------------------------------------------------
# slugify
# ---------------------------------------------------------------------------

class TestSlugify:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Café Medina", "cafe-medina"),
            ("  Hello   World  ", "hello-world"),
            ("Homer St. Cafe and Bar", "homer-st-cafe-and-bar"),
            ("a -- b", "a-b"),
            ("-Leading and trailing-", "leading-and-trailing"),
            ("Ça va!", "ca-va"),
            ("The 515 Bar", "the-515-bar"),
            ("", ""),
            ("!!!", ""),
        ],
    )
    def test_examples(self, text: str, expected: str) -> None:
        assert slugify(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["Café Medina", "Kissa Tanto", "  --weird__ input--  ", "Ñandú & Co.", "\tTab\nNewline", "", "ｆｕｌｌ ｗｉｄｔｈ"],
    )
    def test_idempotent(self, text: str) -> None:
        once = slugify(text)
        assert slugify(once) == once

    def test_output_alphabet(self) -> None:
        slug = slugify("Bao Bei & Chinese Brasserie (Chinatown)")
        assert slug == "bao-bei-chinese-brasserie-chinatown"


# ---------------------------------------------------------------------------
# normalize_address
# ---------------------------------------------------------------------------

class TestNormalizeAddress:
    def test_street_with_bare_province_gets_default_city(self) -> None:
        assert normalize_address("123 Main Street BC") == "123 Main Street, Vancouver, BC"

    def test_full_address_with_postal_code_and_country(self) -> None:
        raw = "500 Robson Street, Vancouver, British Columbia V6B 6A5, Canada"
        assert normalize_address(raw) == "500 Robson Street, Vancouver, BC"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1133 Hamilton St, Vancouver, BC V6B 5P6", "1133 Hamilton St, Vancouver, BC"),
            ("3388 Main Street, BC", "3388 Main Street, Vancouver, BC"),
            ("2539 W Broadway, Vancouver BC V6K 2E9", "2539 W Broadway, Vancouver, BC"),
            ("Pacific Centre BC BC", "Pacific Centre BC, Vancouver, BC"),
            ("1 BC Ferries Way, Tsawwassen BC", "1 BC Ferries Way, Tsawwassen, BC"),
            ("1 Lonsdale Ave, North Vancouver, BC V7M2E4, Canada", "1 Lonsdale Ave, North Vancouver, BC"),
            ("12 Oak St , vancouver,british columbia", "12 Oak St, vancouver, BC"),
            ("Vancouver, BC", "Vancouver, BC"),
            ("", ""),
        ],
    )
    def test_examples(self, raw: str, expected: str) -> None:
        assert normalize_address(raw) == expected

    def test_custom_default_city(self) -> None:
        assert normalize_address("10 Bay St, BC", default_city="Victoria") == "10 Bay St, Victoria, BC"

    @pytest.mark.parametrize(
        "raw",
        [
            "123 Main Street BC",
            "500 Robson Street, Vancouver, British Columbia V6B 6A5, Canada",
            ",,, BC ,",
            "Canada",
            "V6B 6A5",
            "   ",
            "BC",
            "Main St BC Canada",
            "123 Main St, bc",
            "123 Main St bc",
            "Canada Place, Vancouver",
            "Unit 4 - 88 W Pender St,Vancouver,BC",
            "Pacific Centre BC BC",
            "BC Place BC",
            "BC BC BC",
        ],
    )
    def test_idempotent_and_total(self, raw: str) -> None:
        once = normalize_address(raw)
        assert normalize_address(once) == once


# ---------------------------------------------------------------------------
# IdentityResolver
# ---------------------------------------------------------------------------

class TestIdentityResolver:
    def test_known_alias_maps_to_canonical(self) -> None:
        resolver = IdentityResolver()
        assert resolver.resolve("Pidgin Restaurant") == CanonicalIdentity("pidgin", "Pidgin")
        assert resolver.resolve("Hawksworth Bar") == CanonicalIdentity(
            "hawksworth-restaurant", "Hawksworth Restaurant"
        )

    def test_alias_keyed_by_slug_not_spelling(self) -> None:
        resolver = IdentityResolver()
        assert resolver.resolve("Homer St. Cafe & Bar").slug != "homer-street-cafe-and-bar"
        assert resolver.resolve("  Homer St Cafe and Bar ").slug == "homer-street-cafe-and-bar"

    def test_unknown_name_passes_through(self) -> None:
        resolver = IdentityResolver()
        assert resolver.resolve(" Kissa Tanto ") == CanonicalIdentity("kissa-tanto", "Kissa Tanto")

    def test_phone_override_wins(self) -> None:
        resolver = IdentityResolver()
        assert resolver.phone_for("bar-tartare", "(604) 000-0000") == "(604) 893-7832"
        assert resolver.phone_for("kissa-tanto", "(604) 111-2222") == "(604) 111-2222"
        assert resolver.phone_for("kissa-tanto") == ""

    def test_extra_tables_layer_over_builtins(self) -> None:
        resolver = IdentityResolver(
            aliases={"st-lawrence-restaurant": CanonicalIdentity("st-lawrence", "St. Lawrence")},
            phone_overrides={"st-lawrence": "(604) 620-3800"},
        )
        assert resolver.resolve("St Lawrence Restaurant").name == "St. Lawrence"
        assert resolver.phone_for("st-lawrence") == "(604) 620-3800"
        assert resolver.resolve("Suyo Modern Peruvian").slug == "suyo"


# ---------------------------------------------------------------------------
# normalize_restaurants
# ---------------------------------------------------------------------------

class TestNormalizeRestaurants:
    def test_fields_are_normalized(self) -> None:
        records = normalize_restaurants([
            {
                "name": "  Suyo Modern Peruvian ",
                "address": "3475 Main St, Vancouver, BC V5V 3M9",
                "source_url": "https://vancouver.eater.com/venue/suyo",
                "phone": "(604) 555-0100",
                "latitude": 49.25,
                "longitude": -123.1,
            }
        ])

        assert records == [
            RestaurantRecord(
                name="Suyo",
                slug="suyo",
                address="3475 Main St, Vancouver, BC",
                source_url="https://vancouver.eater.com/venue/suyo",
                phone="(604) 555-0100",
                latitude=49.25,
                longitude=-123.1,
            )
        ]

    def test_drops_items_without_a_name(self) -> None:
        records = normalize_restaurants([{"name": ""}, {"name": None}, {"address": "1 Main St"}, {"name": "???"}, "junk"])
        assert records == []

    def test_duplicate_fills_empty_phone(self) -> None:
        records = normalize_restaurants([
            {"name": "Kissa Tanto", "phone": "", "website": "https://kissatanto.com"},
            {"name": "Kissa Tanto", "phone": "(604) 379-8078", "website": "https://other.example.com"},
        ])

        assert len(records) == 1
        assert records[0].phone == "(604) 379-8078"
        assert records[0].website == "https://kissatanto.com"

    def test_aliases_collapse_into_one_record(self) -> None:
        records = normalize_restaurants([
            {"name": "Pidgin", "address": ""},
            {"name": "Pidgin Restaurant", "address": "350 Carrall St, Vancouver, BC"},
        ])

        assert [(r.slug, r.name, r.address) for r in records] == [
            ("pidgin", "Pidgin", "350 Carrall St, Vancouver, BC")
        ]

    def test_sorted_by_name_regardless_of_input_order(self) -> None:
        items = [{"name": n} for n in ["banana Bar", "Écume", "Apple Bistro", "cherry Cafe", "Dosa House"]]
        forward = normalize_restaurants(items)
        backward = normalize_restaurants(list(reversed(items)))

        expected = ["Apple Bistro", "banana Bar", "cherry Cafe", "Dosa House", "Écume"]
        assert [r.name for r in forward] == expected
        assert forward == backward

    def test_coordinates_need_both_finite_numbers(self) -> None:
        records = normalize_restaurants([
            {"name": "A", "latitude": 49.2, "longitude": "-123.1"},
            {"name": "B", "latitude": math.nan, "longitude": -123.1},
            {"name": "C", "latitude": True, "longitude": -123.1},
            {"name": "D", "latitude": 49, "longitude": -123},
        ])
        coords = {r.name: (r.latitude, r.longitude) for r in records}

        assert coords["A"] == (None, None)
        assert coords["B"] == (None, None)
        assert coords["C"] == (None, None)
        assert coords["D"] == (49.0, -123.0)

    def test_phone_override_applied_after_resolution(self) -> None:
        records = normalize_restaurants([{"name": "Bar Tartare", "phone": ""}])
        assert records[0].phone == "(604) 893-7832"

    def test_to_dict_omits_missing_coordinates(self) -> None:
        record = RestaurantRecord(name="Pidgin", slug="pidgin")
        data = record.to_dict()

        assert data["sourceUrl"] == ""
        assert "latitude" not in data
        assert RestaurantRecord.from_dict(data) == record
