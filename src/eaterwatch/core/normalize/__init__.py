"""Normalization and canonicalization of extracted data."""

from .slug import slugify
from .address import DEFAULT_CITY, normalize_address
from .identity import (
    CANONICAL_RESTAURANTS,
    PHONE_OVERRIDES,
    CanonicalIdentity,
    IdentityResolver,
)
from .canonical import RestaurantRecord, normalize_record, normalize_restaurants
from .diff import (
    VersionDiff,
    build_frequency,
    compute_fingerprint,
    compute_version_diff,
    is_duplicate,
)

__all__ = [
    # Slugs and addresses
    "slugify",
    "DEFAULT_CITY",
    "normalize_address",
    # Identity
    "CANONICAL_RESTAURANTS",
    "PHONE_OVERRIDES",
    "CanonicalIdentity",
    "IdentityResolver",
    # Canonical
    "RestaurantRecord",
    "normalize_record",
    "normalize_restaurants",
    # Diff
    "VersionDiff",
    "build_frequency",
    "compute_fingerprint",
    "compute_version_diff",
    "is_duplicate",
]
