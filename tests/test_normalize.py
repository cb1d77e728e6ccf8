"""Tests for raw record normalization."""

import pytest

from medal_standings.pipeline.normalize import (
    FIELD_ALIASES,
    coerce_count,
    normalize_record,
    normalize_records,
    resolve_field,
)


class TestResolveField:
    """Tests for alias resolution order."""

    def test_first_alias_wins(self):
        raw = {"country_name": "Norway", "country": "NOR", "name": "Norge"}
        assert resolve_field(raw, "country") == "Norway"

    def test_falls_through_absent_values(self):
        raw = {"country_name": None, "country": "  ", "name": "Italy"}
        assert resolve_field(raw, "country") == "Italy"

    def test_zero_is_not_absent(self):
        raw = {"gold": 0, "gold_medals": 7}
        assert resolve_field(raw, "gold") == 0

    def test_missing_everywhere(self):
        assert resolve_field({}, "flag_url") is None

    def test_every_field_has_aliases(self):
        for field_name in ("country", "flag_url", "gold", "silver", "bronze", "total"):
            assert FIELD_ALIASES[field_name]


class TestCoerceCount:
    """Tests for numeric defaults."""

    @pytest.mark.parametrize("value,expected", [
        (3, 3),
        (3.9, 3),
        ("12", 12),
        (" 7 ", 7),
        ("1,024", 1024),
        ("4.0", 4),
        ("n/a", 0),
        ("", 0),
        (None, 0),
        (True, 0),
        ([1], 0),
        ({"count": 1}, 0),
        (-2, 0),
        ("-5", 0),
        (float("nan"), 0),
    ])
    def test_values(self, value, expected):
        assert coerce_count(value) == expected


class TestNormalizeRecord:
    """Tests for StandingEntry construction."""

    def test_api_shape(self):
        entry = normalize_record({
            "country_name": "United States",
            "flag_url": "https://flags.example/us.png",
            "gold": 40,
            "silver": 44,
            "bronze": 42,
            "total": 126,
        })

        assert entry.country == "United States"
        assert entry.flag_url == "https://flags.example/us.png"
        assert (entry.gold, entry.silver, entry.bronze) == (40, 44, 42)
        assert entry.raw_total == 126

    def test_alternate_shape(self):
        entry = normalize_record({
            "name": "Japan",
            "flag": "jp.svg",
            "gold_medals": 20,
            "silver_medals": 12,
            "bronze_medals": 13,
            "total_medals": 45,
        })

        assert entry.country == "Japan"
        assert entry.flag_url == "jp.svg"
        assert entry.raw_total == 45

    def test_defaults(self):
        entry = normalize_record({})

        assert entry.country == "Unknown"
        assert entry.flag_url == ""
        assert (entry.gold, entry.silver, entry.bronze, entry.raw_total) == (0, 0, 0, 0)

    def test_total_computed_when_missing(self):
        entry = normalize_record({"country": "A", "gold": 1, "silver": 2, "bronze": 3})
        assert entry.raw_total == 6

    def test_source_total_kept_even_if_inconsistent(self):
        entry = normalize_record({"country": "A", "gold": 1, "total": 9})
        assert entry.raw_total == 9

    def test_malformed_counts_do_not_drop_record(self):
        entry = normalize_record({"country": "A", "gold": "lots", "silver": None, "bronze": "2"})
        assert (entry.gold, entry.silver, entry.bronze) == (0, 0, 2)

    def test_computed_fields_zeroed(self):
        entry = normalize_record({"country": "A", "gold": 5})
        assert entry.weighted_score == 0
        assert entry.rank == 0
        assert entry.gap_from_leader == 0

    def test_non_string_flag_ignored(self):
        entry = normalize_record({"country": "A", "flag": {"url": "x"}})
        assert entry.flag_url == ""


class TestNormalizeRecords:
    """Tests for batch normalization."""

    def test_keeps_order(self):
        entries = normalize_records([{"country": "B"}, {"country": "A"}, {"country": "C"}])
        assert [e.country for e in entries] == ["B", "A", "C"]

    def test_skips_non_mappings(self):
        entries = normalize_records([{"country": "A"}, "garbage", None, 42, ["x"]])
        assert [e.country for e in entries] == ["A"]

    def test_empty(self):
        assert normalize_records([]) == []
