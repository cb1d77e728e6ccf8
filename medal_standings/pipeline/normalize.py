"""
Map raw source records onto StandingEntry.

Each canonical field has an ordered list of accepted source keys; the first
key holding a usable value wins. Supporting a new source shape means adding
aliases here, not new branches.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional

from .models import StandingEntry

logger = logging.getLogger(__name__)

FIELD_ALIASES: Dict[str, List[str]] = {
    "country": ["country_name", "country", "name"],
    "flag_url": ["flag_url", "flag", "flagUrl"],
    "gold": ["gold", "gold_medals"],
    "silver": ["silver", "silver_medals"],
    "bronze": ["bronze", "bronze_medals"],
    "total": ["total", "total_medals"],
}

UNKNOWN_COUNTRY = "Unknown"


def _is_absent(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def resolve_field(raw: Mapping, field_name: str) -> Optional[Any]:
    """Return the first non-absent value among the field's aliases, else None."""
    for alias in FIELD_ALIASES[field_name]:
        value = raw.get(alias)
        if not _is_absent(value):
            return value
    return None


def coerce_count(value: Any) -> int:
    """
    Coerce a sourced medal count to a non-negative int.

    Ints pass through, floats truncate, numeric strings (with optional
    thousands separators) parse. Everything else, booleans included, is 0.
    """
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, int):
        count = value
    elif isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return 0
        count = int(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        try:
            count = int(text)
        except ValueError:
            try:
                count = int(float(text))
            except (ValueError, OverflowError):
                return 0
    else:
        return 0

    return max(count, 0)


def normalize_record(raw: Mapping) -> StandingEntry:
    """
    Normalize one raw record. rank, weighted_score and gap_from_leader stay 0.
    """
    country = resolve_field(raw, "country")
    country = str(country).strip() if country is not None else UNKNOWN_COUNTRY

    flag_url = resolve_field(raw, "flag_url")
    flag_url = flag_url.strip() if isinstance(flag_url, str) else ""

    gold = coerce_count(resolve_field(raw, "gold"))
    silver = coerce_count(resolve_field(raw, "silver"))
    bronze = coerce_count(resolve_field(raw, "bronze"))

    total = resolve_field(raw, "total")
    raw_total = coerce_count(total) if total is not None else gold + silver + bronze

    return StandingEntry(
        country=country,
        flag_url=flag_url,
        gold=gold,
        silver=silver,
        bronze=bronze,
        raw_total=raw_total,
    )


def normalize_records(raws: Iterable[Any]) -> List[StandingEntry]:
    """Normalize records in source order, skipping anything that is not a mapping."""
    entries = []
    skipped = 0

    for raw in raws:
        if not isinstance(raw, Mapping):
            skipped += 1
            continue
        entries.append(normalize_record(raw))

    if skipped:
        logger.warning(f"Skipped {skipped} unrecognizable raw record(s)")

    return entries
