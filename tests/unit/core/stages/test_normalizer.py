from __future__ import annotations

"""
Unit tests for the Record Normalizer.

Verifies:
1. Coercion of textual magnitudes (thousands separators, signs).
2. Rejection of malformed entries without aborting the batch.
3. Duplicate path detection and policies.
"""

import logging

import pytest

from reviewtree.core.pipeline.stages.normalizer import (
    InvalidEntry,
    normalize_entry,
    normalize_records,
    parse_magnitude,
)
from reviewtree.domain.records import ChangeRecord


@pytest.mark.parametrize("raw, expected", [
    (10, 10),
    (0, 0),
    (-7, -7),
    ("42", 42),
    (" 1,234 ", 1234),
    ("-1,000", -1000),
    ("+5", 5),
    (3.0, 3),
])
def test_parse_magnitude_accepts_integers(raw, expected) -> None:
    assert parse_magnitude(raw) == expected


@pytest.mark.parametrize("raw", ["BIN", "", "1.5", "12a", None, True, 2.5, [1], "١٢", "１２", "1_000"])
def test_parse_magnitude_rejects_non_integers(raw) -> None:
    with pytest.raises(InvalidEntry):
        parse_magnitude(raw)


def test_normalize_entry_builds_record() -> None:
    record = normalize_entry({"path": "a/b.txt", "magnitude": "3", "reviewed": True})
    assert record == ChangeRecord(path="a/b.txt", magnitude=3, reviewed=True)


def test_normalize_entry_accepts_scraper_field_names() -> None:
    """Page scrapers emit filePath/diff and may omit the reviewed flag."""
    record = normalize_entry({"filePath": "src/x.js", "diff": 9})
    assert record == ChangeRecord(path="src/x.js", magnitude=9, reviewed=False)


@pytest.mark.parametrize("flag", ["", "  ", None])
def test_normalize_entry_blank_reviewed_flag_is_false(flag) -> None:
    record = normalize_entry({"path": "a.txt", "magnitude": 1, "reviewed": flag})
    assert record.reviewed is False


def test_normalize_entry_strips_surrounding_separators() -> None:
    record = normalize_entry({"path": " /a/b.txt/ ", "magnitude": 1, "reviewed": "yes"})
    assert record.path == "a/b.txt"
    assert record.reviewed is True


@pytest.mark.parametrize("entry", [
    {"path": "", "magnitude": 1, "reviewed": False},
    {"path": "///", "magnitude": 1},
    {"magnitude": 1},
    {"path": "a//b.txt", "magnitude": 1},
    {"path": 12, "magnitude": 1},
    {"path": "a.txt", "magnitude": "BIN"},
    {"path": "a.txt"},
    {"path": "a.txt", "magnitude": 1, "reviewed": "maybe"},
    "a.txt",
])
def test_normalize_entry_rejects_malformed(entry) -> None:
    with pytest.raises(InvalidEntry):
        normalize_entry(entry)


def test_normalize_records_drops_malformed_and_logs(caplog) -> None:
    """A malformed entry never aborts the batch."""
    entries = [
        {"path": "", "magnitude": 1, "reviewed": False},
        {"path": "a/x.txt", "magnitude": 5, "reviewed": True},
        {"path": "bin/logo.png", "magnitude": "BIN", "reviewed": False},
    ]

    with caplog.at_level(logging.WARNING):
        report = normalize_records(entries)

    assert report.records == [ChangeRecord("a/x.txt", 5, True)]
    assert report.rejected == 2
    assert "Rejected entry #0" in caplog.text
    assert "Rejected entry #2" in caplog.text


def test_normalize_records_keeps_input_order(raw_batch) -> None:
    report = normalize_records(raw_batch)

    assert [r.path for r in report.records] == [e["path"] for e in raw_batch]
    assert report.records[0].magnitude == 1200
    assert report.rejected == 0
    assert report.duplicates == []


def test_duplicates_accumulate_by_default(caplog) -> None:
    entries = [
        {"path": "a/x.txt", "magnitude": 1},
        {"path": "a/x.txt", "magnitude": 4, "reviewed": True},
    ]

    with caplog.at_level(logging.WARNING):
        report = normalize_records(entries)

    assert len(report.records) == 2
    assert report.duplicates == ["a/x.txt"]
    assert "Duplicate path 'a/x.txt'" in caplog.text


def test_duplicates_last_wins_keeps_last_record() -> None:
    entries = [
        {"path": "a/x.txt", "magnitude": 1},
        {"path": "b/y.txt", "magnitude": 2},
        {"path": "a/x.txt", "magnitude": 4, "reviewed": True},
    ]

    report = normalize_records(entries, duplicate_policy="last_wins")

    assert report.records == [
        ChangeRecord("a/x.txt", 4, True),
        ChangeRecord("b/y.txt", 2, False),
    ]
    assert report.duplicates == ["a/x.txt"]


def test_unknown_duplicate_policy_raises() -> None:
    with pytest.raises(ValueError):
        normalize_records([], duplicate_policy="merge")
