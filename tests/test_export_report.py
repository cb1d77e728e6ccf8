"""Tests for the snapshot output contract and text reports."""

import json
from datetime import datetime, timezone

import pytest

from medal_standings.pipeline.export import (
    SCHEMA_PATH,
    SnapshotValidationError,
    validate_snapshot,
    write_snapshot,
)
from medal_standings.pipeline.models import StandingsSnapshot
from medal_standings.report import format_standings_table, leader_summary
from medal_standings.standings.engine import compute_standings
from medal_standings.standings.fallback import fallback_snapshot


@pytest.fixture
def live_snapshot():
    medals = compute_standings([
        {"country_name": "Norway", "flag_url": "nor.svg", "gold": 16, "silver": 8, "bronze": 13},
        {"country_name": "Germany", "gold": 12, "silver": 10, "bronze": 5},
        {"country_name": "Italy", "gold": 10, "silver": 6, "bronze": 2},
        {"country_name": "Austria", "gold": 9, "silver": 8, "bronze": 2},
    ])
    return StandingsSnapshot(
        fetched_at=datetime(2026, 2, 20, tzinfo=timezone.utc).isoformat(),
        medals=medals,
    )


class TestValidateSnapshot:
    def test_live_snapshot_valid(self, live_snapshot):
        assert validate_snapshot(live_snapshot.to_dict())

    def test_fallback_valid(self):
        assert validate_snapshot(fallback_snapshot().to_dict())

    def test_missing_field(self, live_snapshot):
        data = live_snapshot.to_dict()
        del data["medals"][0]["weightedScore"]

        with pytest.raises(SnapshotValidationError, match="weightedScore"):
            validate_snapshot(data)

    def test_negative_count(self, live_snapshot):
        data = live_snapshot.to_dict()
        data["medals"][1]["gold"] = -1

        with pytest.raises(SnapshotValidationError):
            validate_snapshot(data)

    def test_out_of_order(self, live_snapshot):
        data = live_snapshot.to_dict()
        data["medals"].reverse()

        with pytest.raises(SnapshotValidationError):
            validate_snapshot(data)

    def test_tied_entries_ranked_differently(self):
        data = {
            "fetchedAt": "2026-02-20T00:00:00+00:00",
            "medals": [
                {"country": "A", "flagUrl": "", "gold": 3, "silver": 0, "bronze": 0,
                 "rawTotal": 3, "weightedScore": 12, "rank": 1, "gapFromLeader": 0},
                {"country": "B", "flagUrl": "", "gold": 2, "silver": 2, "bronze": 0,
                 "rawTotal": 4, "weightedScore": 12, "rank": 2, "gapFromLeader": 0},
            ],
        }

        with pytest.raises(SnapshotValidationError, match="tied"):
            validate_snapshot(data)


class TestWriteSnapshot:
    def test_writes_json(self, tmp_path, live_snapshot):
        path = write_snapshot(live_snapshot, tmp_path / "out" / "standings.json")

        data = json.loads(path.read_text())
        assert data["fetchedAt"] == "2026-02-20T00:00:00+00:00"
        assert [m["country"] for m in data["medals"]] == ["Norway", "Germany", "Italy", "Austria"]
        assert data["medals"][0]["flagUrl"] == "nor.svg"


class TestReport:
    def test_leader_summary(self, live_snapshot):
        summary = leader_summary(live_snapshot)

        assert summary["title"] == "Norway is the medal leader"
        assert summary["description"] == "Gold 16 | Silver 8 | Bronze 13"

    def test_leader_summary_fallback(self):
        summary = leader_summary(fallback_snapshot())
        assert summary["title"] == "Olympic Medal Count"

    def test_table(self, live_snapshot):
        md = format_standings_table(live_snapshot)

        assert "| Rank | Country |" in md
        assert "| 1 | Norway | 16 | 8 | 13 | 37 | 93 | - |" in md
        # Germany 73, gap ceil(20/4) = 5
        assert "| 2 | Germany | 12 | 10 | 5 | 27 | 73 | 5 |" in md

    def test_table_fallback(self):
        md = format_standings_table(fallback_snapshot())
        assert "No data available" in md
        assert "| Rank |" not in md


class TestMalformedSnapshots:
    """Malformed input must surface as SnapshotValidationError, never a raw KeyError."""

    def test_missing_medals_without_schema(self):
        with pytest.raises(SnapshotValidationError, match="medals"):
            validate_snapshot({"fetchedAt": "x"}, schema_path=None)

    def test_medals_not_a_list(self):
        with pytest.raises(SnapshotValidationError, match="list"):
            validate_snapshot({"fetchedAt": "x", "medals": {"a": 1}}, schema_path=None)

    def test_entry_missing_ordering_fields(self):
        data = {"fetchedAt": "x", "medals": [{"country": "A"}]}
        with pytest.raises(SnapshotValidationError, match="weightedScore"):
            validate_snapshot(data, schema_path=None)

    def test_not_an_object(self):
        with pytest.raises(SnapshotValidationError):
            validate_snapshot(["fetchedAt"], schema_path=None)

    def test_unreadable_schema_is_reported(self, tmp_path, live_snapshot):
        with pytest.raises(SnapshotValidationError, match="schema"):
            validate_snapshot(live_snapshot.to_dict(), schema_path=tmp_path / "missing.schema.json")

    def test_schema_ships_inside_package(self):
        assert SCHEMA_PATH.exists()
        assert SCHEMA_PATH.parent.name == "schemas"
        assert SCHEMA_PATH.parent.parent.name == "medal_standings"
