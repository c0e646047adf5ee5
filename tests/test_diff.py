"""Tests for fingerprints and version diffs."""

from __future__ import annotations

import hashlib

from eaterwatch.core.normalize import (
    RestaurantRecord,
    build_frequency,
    compute_fingerprint,
    compute_version_diff,
    is_duplicate,
)


def _records(*slugs: str, blurb: str = "") -> list[RestaurantRecord]:
    return [
        RestaurantRecord(name=slug.replace("-", " ").title(), slug=slug, description_text=blurb)
        for slug in slugs
    ]


class TestFingerprint:
    def test_format(self) -> None:
        fingerprint = compute_fingerprint(_records("pidgin", "suyo"))

        expected = hashlib.sha256(b'["pidgin","suyo"]').hexdigest()[:32]
        assert fingerprint == expected
        assert len(fingerprint) == 32

    def test_only_membership_counts(self) -> None:
        a = compute_fingerprint(_records("pidgin", "suyo", "kissa-tanto", blurb="old"))
        b = compute_fingerprint(_records("kissa-tanto", "pidgin", "suyo", blurb="new"))
        assert a == b

    def test_membership_change(self) -> None:
        assert compute_fingerprint(_records("pidgin")) != compute_fingerprint(_records("pidgin", "suyo"))

    def test_empty_snapshot(self) -> None:
        assert compute_fingerprint([]) == hashlib.sha256(b"[]").hexdigest()[:32]

    def test_is_duplicate(self) -> None:
        assert is_duplicate("abc", "abc")
        assert not is_duplicate("abc", "abd")
        assert not is_duplicate("abc", None)


class TestVersionDiff:
    def test_added_and_removed(self) -> None:
        diff = compute_version_diff(_records("kissa-tanto", "suyo"), _records("pidgin", "suyo"))

        assert [r.slug for r in diff.added] == ["kissa-tanto"]
        assert [r.slug for r in diff.removed] == ["pidgin"]
        assert diff.has_changes
        assert diff.summary == "+1 / -1"

    def test_first_version_is_all_added(self) -> None:
        diff = compute_version_diff(_records("pidgin", "suyo"))
        assert len(diff.added) == 2
        assert diff.removed == []

    def test_no_changes(self) -> None:
        diff = compute_version_diff(_records("pidgin"), _records("pidgin", blurb="other"))
        assert not diff.has_changes
        assert diff.summary == "No changes"


def test_build_frequency() -> None:
    frequency = build_frequency([_records("pidgin", "suyo"), _records("suyo"), _records("suyo", "kissa-tanto")])

    assert frequency == {
        "pidgin": ("Pidgin", 1),
        "suyo": ("Suyo", 3),
        "kissa-tanto": ("Kissa Tanto", 1),
    }
