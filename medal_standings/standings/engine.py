"""
Standings pipeline: fetch -> normalize -> score -> rank.

``get_standings`` is the public entry point. It always returns a
StandingsSnapshot; missing credentials, upstream outages and schema drift
all degrade to the fallback snapshot instead of raising.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from ..ingest.base_fetcher import BaseFetcher
from ..ingest.fetch_api import ApiFetcher
from ..ingest.fetch_html import HtmlFetcher
from ..config.settings import VALID_SOURCES, load_standings_config
from ..pipeline.models import StandingEntry, StandingsSnapshot
from ..pipeline.normalize import normalize_records
from .fallback import fallback_snapshot
from .ranker import rank_entries
from .scorer import score_entries

logger = logging.getLogger(__name__)

FETCHERS = {
    "api": ApiFetcher,
    "html": HtmlFetcher,
}


class ConfigurationError(ValueError):
    """Raised when the deployment config names an unknown source."""
    pass


def build_fetcher(config: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None) -> BaseFetcher:
    """
    Build the single source adapter active for this deployment.

    Args:
        config: Full standings config (None = load config/standings.yaml)
        timeout: Override for config["timeout_seconds"]

    Raises:
        ConfigurationError: If config["source"] is not a known adapter
    """
    if config is None:
        config = load_standings_config()

    source = config.get("source", "api")
    if source not in FETCHERS:
        raise ConfigurationError(
            f"Unknown source '{source}'. Must be one of: {', '.join(VALID_SOURCES)}"
        )

    if timeout is None:
        timeout = config.get("timeout_seconds")

    return FETCHERS[source](config.get(source, {}), timeout=timeout)


def compute_standings(raws: Iterable[Any]) -> List[StandingEntry]:
    """Normalize, score and rank raw records. Pure and deterministic."""
    return rank_entries(score_entries(normalize_records(raws)))


def get_standings(
    fetcher: Optional[BaseFetcher] = None,
    now: Optional[datetime] = None,
) -> StandingsSnapshot:
    """
    Produce today's standings.

    Args:
        fetcher: Source adapter (None = build from config/standings.yaml)
        now: Timestamp recorded as fetched_at (None = current UTC time)

    Returns:
        A fresh snapshot, or the fallback snapshot when no usable data came back
    """
    if fetcher is None:
        try:
            fetcher = build_fetcher()
        except ConfigurationError as e:
            logger.error(f"Using fallback standings: {e}")
            return fallback_snapshot()

    raws, error = fetcher.fetch()
    if error:
        logger.warning(f"Using fallback standings: {error}")
        return fallback_snapshot()

    medals = compute_standings(raws)
    if not medals:
        logger.warning(f"Using fallback standings: {fetcher.source_id} returned no usable records")
        return fallback_snapshot()

    if now is None:
        now = datetime.now(timezone.utc)

    return StandingsSnapshot(fetched_at=now.isoformat(), medals=medals)
