"""
Address normalization for British Columbia street addresses.

Rewrites the address variants found across page formats
("..., Vancouver, British Columbia V6B 6A5, Canada", "... Vancouver BC",
"123 Main St, BC") into one form: "<street>, <city>, BC".
"""

from __future__ import annotations

import re

DEFAULT_CITY = "Vancouver"
PROVINCE = "BC"

_PROVINCE_NAME = re.compile(r"\bBritish\s+Columbia\b", re.IGNORECASE)
_COUNTRY = re.compile(r",?\s*\bCanada\b", re.IGNORECASE)

# Canadian postal code (D, F, I, O, Q, U never appear; W, Z never lead)
_POSTAL_CODE = re.compile(
    r"\b[ABCEGHJ-NPRSTVXY]\d[ABCEGHJ-NPRSTV-Z][ -]?\d[ABCEGHJ-NPRSTV-Z]\d\b",
    re.IGNORECASE,
)

_MULTI_SPACE = re.compile(r"\s{2,}")
_SPACE_BEFORE_COMMA = re.compile(r"\s+,")
_REPEATED_COMMAS = re.compile(r",(?:\s*,)+")
_COMMA_SPACING = re.compile(r",\s*")
_EDGE_SEPARATORS = re.compile(r"^[\s,]+|[\s,]+$")

# Trailing "Vancouver BC" -> "Vancouver, BC"; case-sensitive on the province
_BARE_PROVINCE = re.compile(r"\b([A-Za-z.'-]+(?:\s+[A-Za-z.'-]+)*)\s+BC$")
_TRAILING_PROVINCE = re.compile(r",\s*BC$", re.IGNORECASE)


def _cleanup_separators(text: str) -> str:
    text = _MULTI_SPACE.sub(" ", text)
    text = _SPACE_BEFORE_COMMA.sub(",", text)
    text = _REPEATED_COMMAS.sub(",", text)
    text = _COMMA_SPACING.sub(", ", text)
    return _EDGE_SEPARATORS.sub("", text)


def normalize_address(raw: str, *, default_city: str = DEFAULT_CITY) -> str:
    """Normalize an address string.

    Steps, in order: province name to "BC", drop the country, drop the
    postal code, tidy separators, add the comma before a bare "BC", and
    inject the default city when only "<street>, BC" is left.

    Args:
        raw: Address as found in the page (may be empty)
        default_city: City used when the address carries none

    Returns:
        Normalized address, or "" for empty input
    """
    if not raw:
        return ""

    out = raw.strip()
    out = _PROVINCE_NAME.sub(PROVINCE, out)
    out = _COUNTRY.sub("", out)
    out = _POSTAL_CODE.sub("", out)
    out = _cleanup_separators(out)

    out = _BARE_PROVINCE.sub(r"\1, BC", out)
    out = _cleanup_separators(out)

    if out.count(",") == 1 and _TRAILING_PROVINCE.search(out):
        street = out.split(",", 1)[0].strip()
        if street.lower() != default_city.lower():
            out = _TRAILING_PROVINCE.sub(f", {default_city}, {PROVINCE}", out)

    return out
