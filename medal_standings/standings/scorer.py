"""
Weighted medal scoring.

Countries are ranked by a fixed 4/2/1 weighting (gold/silver/bronze) rather
than by raw medal total. The weights are a published business rule and are
not configurable.
"""

from dataclasses import replace
from typing import Iterable, List

from ..pipeline.models import StandingEntry

GOLD_POINTS = 4
SILVER_POINTS = 2
BRONZE_POINTS = 1


def weighted_score(gold: int, silver: int, bronze: int) -> int:
    """Return ``gold*4 + silver*2 + bronze``."""
    return gold * GOLD_POINTS + silver * SILVER_POINTS + bronze * BRONZE_POINTS


def score_entries(entries: Iterable[StandingEntry]) -> List[StandingEntry]:
    """Return new entries with weighted_score populated, in the same order."""
    return [
        replace(entry, weighted_score=weighted_score(entry.gold, entry.silver, entry.bronze))
        for entry in entries
    ]
