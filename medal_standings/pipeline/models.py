"""
Standings data models.

These are intentionally lightweight (stdlib only) so the engine stays easy to
embed. Both models are frozen: the ranker builds new entries instead of
mutating the ones it was given.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class StandingEntry:
    country: str = "Unknown"
    flag_url: str = ""
    gold: int = 0
    silver: int = 0
    bronze: int = 0
    raw_total: int = 0
    weighted_score: int = 0
    rank: int = 0
    gap_from_leader: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "country": self.country,
            "flagUrl": self.flag_url,
            "gold": self.gold,
            "silver": self.silver,
            "bronze": self.bronze,
            "rawTotal": self.raw_total,
            "weightedScore": self.weighted_score,
            "rank": self.rank,
            "gapFromLeader": self.gap_from_leader,
        }


@dataclass(frozen=True)
class StandingsSnapshot:
    fetched_at: str  # ISO-8601 UTC, or "fallback"
    medals: Tuple[StandingEntry, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any sequence but store a tuple so the snapshot stays immutable
        object.__setattr__(self, "medals", tuple(self.medals))

    @property
    def leader(self) -> Optional[StandingEntry]:
        return self.medals[0] if self.medals else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fetchedAt": self.fetched_at,
            "medals": [entry.to_dict() for entry in self.medals],
        }
