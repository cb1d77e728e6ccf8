"""
Placeholder standings used when live data cannot be obtained.

Consumers always get a well-formed snapshot; a fallback is recognizable by
its ``fetched_at`` sentinel and single "No data available" row.
"""

from ..pipeline.models import StandingEntry, StandingsSnapshot

FALLBACK_FETCHED_AT = "fallback"
FALLBACK_COUNTRY = "No data available"

FALLBACK_ENTRY = StandingEntry(
    country=FALLBACK_COUNTRY,
    flag_url="",
    gold=0,
    silver=0,
    bronze=0,
    raw_total=0,
    weighted_score=0,
    rank=1,
    gap_from_leader=0,
)


def fallback_snapshot() -> StandingsSnapshot:
    return StandingsSnapshot(fetched_at=FALLBACK_FETCHED_AT, medals=(FALLBACK_ENTRY,))


def is_fallback(snapshot: StandingsSnapshot) -> bool:
    return snapshot.fetched_at == FALLBACK_FETCHED_AT
