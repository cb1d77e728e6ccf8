"""
Text renderings of a standings snapshot.

Consumers read rank, score and gap straight from the snapshot; nothing here
recomputes them.
"""

from typing import Dict

from .pipeline.models import StandingsSnapshot
from .standings.fallback import FALLBACK_COUNTRY, is_fallback

DEFAULT_TITLE = "Olympic Medal Count"
DEFAULT_DESCRIPTION = "Live medal standings, ranked by weighted score."


def _has_live_data(snapshot: StandingsSnapshot) -> bool:
    leader = snapshot.leader
    return not is_fallback(snapshot) and leader is not None and leader.country != FALLBACK_COUNTRY


def leader_summary(snapshot: StandingsSnapshot) -> Dict[str, str]:
    """
    Title and description naming the weighted leader.

    Falls back to a generic title when the snapshot carries no live data.
    """
    if not _has_live_data(snapshot):
        return {"title": DEFAULT_TITLE, "description": DEFAULT_DESCRIPTION}

    leader = snapshot.leader
    return {
        "title": f"{leader.country} is the medal leader",
        "description": f"Gold {leader.gold} | Silver {leader.silver} | Bronze {leader.bronze}",
    }


def format_standings_table(snapshot: StandingsSnapshot) -> str:
    """
    Format a snapshot as a markdown standings table.

    Returns:
        Markdown string with a header, leader line and one row per country
    """
    if not _has_live_data(snapshot):
        return f"## {DEFAULT_TITLE}\n\n*No data available*\n"

    summary = leader_summary(snapshot)
    lines = [
        f"## {DEFAULT_TITLE}",
        "",
        f"**{summary['title']}** ({summary['description']})",
        "",
        "| Rank | Country | Gold | Silver | Bronze | Total | Weighted | Behind |",
        "|------|---------|------|--------|--------|-------|----------|--------|",
    ]

    for entry in snapshot.medals:
        behind = "-" if entry.gap_from_leader == 0 else str(entry.gap_from_leader)
        lines.append(
            f"| {entry.rank} | {entry.country} | {entry.gold} | {entry.silver} | "
            f"{entry.bronze} | {entry.raw_total} | {entry.weighted_score} | {behind} |"
        )

    lines.append("")
    lines.append(f"*Fetched at {snapshot.fetched_at}. Weighted score: gold 4, silver 2, bronze 1.*")
    lines.append("")

    return "\n".join(lines)
