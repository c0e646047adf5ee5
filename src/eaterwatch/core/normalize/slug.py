"""Slug generation for restaurant names."""

from __future__ import annotations

import re
import unicodedata

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-{2,}")


def slugify(text: str) -> str:
    """Convert free text into a stable, URL-safe identifier.

    Accents are folded to their base letters and anything outside
    ``[a-z0-9-]`` is dropped, so ``"Café Medina"`` becomes ``"cafe-medina"``.

    Args:
        text: Any string (empty yields empty)

    Returns:
        Lower-case hyphenated slug
    """
    decomposed = unicodedata.normalize("NFKD", text or "")
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))

    out = _DISALLOWED.sub("", stripped.lower()).strip()
    out = _WHITESPACE.sub("-", out)
    out = _HYPHENS.sub("-", out)
    return out.strip("-")
