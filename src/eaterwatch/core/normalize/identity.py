"""
Canonical identity resolution.

The list has renamed or double-listed some restaurants between captures
("Pidgin Restaurant" vs "Pidgin"). Those aliases are mapped onto one
authoritative (slug, name) so the restaurant keeps one key across history.
A second table patches phone numbers the source gets wrong or omits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .slug import slugify


@dataclass(frozen=True)
class CanonicalIdentity:
    """Authoritative identity of a restaurant."""

    slug: str
    name: str


# Keyed by the slug of the name as it appears in the source
CANONICAL_RESTAURANTS: dict[str, CanonicalIdentity] = {
    "hawksworth-bar": CanonicalIdentity("hawksworth-restaurant", "Hawksworth Restaurant"),
    "homer-st-cafe-and-bar": CanonicalIdentity("homer-street-cafe-and-bar", "Homer Street Cafe and Bar"),
    "maruhachi-ra-men-canada-westend": CanonicalIdentity("maruhachi-ra-men", "Maruhachi Ra-men"),
    "pidgin-restaurant": CanonicalIdentity("pidgin", "Pidgin"),
    "suyo-modern-peruvian": CanonicalIdentity("suyo", "Suyo"),
}

# Keyed by canonical slug
PHONE_OVERRIDES: dict[str, str] = {
    "bar-tartare": "(604) 893-7832",
    "the-515-bar": "(604) 428-8226",
}


class IdentityResolver:
    """Resolve raw names to canonical identities.

    Extra tables passed in are layered over the built-in ones.
    """

    def __init__(
        self,
        aliases: Mapping[str, CanonicalIdentity] | None = None,
        phone_overrides: Mapping[str, str] | None = None,
    ) -> None:
        self.aliases = {**CANONICAL_RESTAURANTS, **(aliases or {})}
        self.phone_overrides = {**PHONE_OVERRIDES, **(phone_overrides or {})}

    def resolve(self, raw_name: str) -> CanonicalIdentity:
        """Resolve a display name to its canonical (slug, name)."""
        name = (raw_name or "").strip()
        raw_slug = slugify(name)
        canonical = self.aliases.get(raw_slug)
        if canonical is not None:
            return canonical
        return CanonicalIdentity(slug=raw_slug, name=name)

    def phone_for(self, slug: str, extracted: str = "") -> str:
        """Return the override phone for a slug, else the extracted one."""
        return self.phone_overrides.get(slug) or extracted or ""
