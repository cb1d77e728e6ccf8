"""
Competition ranking over weighted scores.

Entries are sorted by descending weighted score. Equal scores share a rank
and the next distinct score takes its 1-based position, so ``[10, 10, 8]``
ranks as ``[1, 1, 3]``. Python's sort is stable, which leaves tied entries
in the order the source produced them; there is no secondary key.

Each entry also carries its gap behind the leader in gold-medal units,
rounded up so any deficit shows as at least 1.
"""

from dataclasses import replace
from typing import Iterable, List

from ..pipeline.models import StandingEntry
from .scorer import GOLD_POINTS


def gap_in_golds(leader_score: int, score: int) -> int:
    """Ceiling of the score deficit divided by the value of one gold."""
    deficit = leader_score - score
    if deficit <= 0:
        return 0
    return -(-deficit // GOLD_POINTS)


def rank_entries(entries: Iterable[StandingEntry]) -> List[StandingEntry]:
    """
    Sort, rank and gap-compute scored entries.

    Args:
        entries: Entries with weighted_score populated

    Returns:
        New list ordered by descending weighted_score; the input is untouched
    """
    ordered = sorted(entries, key=lambda e: e.weighted_score, reverse=True)
    if not ordered:
        return []

    leader_score = ordered[0].weighted_score
    ranked: List[StandingEntry] = []

    for index, entry in enumerate(ordered):
        if index == 0:
            rank = 1
        elif entry.weighted_score == ranked[-1].weighted_score:
            rank = ranked[-1].rank
        else:
            rank = index + 1

        ranked.append(replace(
            entry,
            rank=rank,
            gap_from_leader=gap_in_golds(leader_score, entry.weighted_score),
        ))

    return ranked
