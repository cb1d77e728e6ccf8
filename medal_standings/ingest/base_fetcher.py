"""Abstract base class for medal-table source adapters."""

import logging
from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional, Tuple

from ..config.secrets import MissingAPIKeyError

logger = logging.getLogger(__name__)

# Default bound for the single outbound request (seconds)
DEFAULT_TIMEOUT_SECONDS = 10

# Characters of an error body kept for diagnostics
DEFAULT_PREVIEW_CHARS = 200

RawRecord = Dict[str, Any]


class FetchError(Exception):
    """Exception raised when a source adapter cannot produce records."""
    def __init__(
        self,
        source_id: str,
        message: str,
        original_error: Optional[Exception] = None,
        status_code: Optional[int] = None,
        body_preview: Optional[str] = None,
    ):
        self.source_id = source_id
        self.message = message
        self.original_error = original_error
        self.status_code = status_code
        self.body_preview = body_preview
        super().__init__(f"{source_id}: {message}")


def preview_text(text: Optional[str], limit: int = DEFAULT_PREVIEW_CHARS) -> str:
    """Collapse whitespace and truncate a response body for log messages."""
    if not text:
        return ""
    collapsed = " ".join(text.split())
    if len(collapsed) <= limit:
        return collapsed
    return collapsed[:limit] + "..."


class BaseFetcher(ABC):
    """Abstract base for source adapters.

    Subclasses implement ``_fetch_impl``; ``fetch`` turns the expected failure
    modes into an error string so callers can route them to the fallback.
    No retries; callers re-invoke on their own schedule.
    """

    source_id = "unknown"

    def __init__(self, source_config: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None):
        self.config = source_config or {}
        self.timeout = timeout if timeout is not None else DEFAULT_TIMEOUT_SECONDS

    @abstractmethod
    def _fetch_impl(self) -> List[RawRecord]:
        """
        Internal fetch implementation - to be overridden by subclasses.

        Returns:
            List of raw per-country records (possibly empty)

        Raises:
            FetchError on transport, HTTP or schema failure
            MissingAPIKeyError when credentials are not configured
        """
        pass

    def fetch(self) -> Tuple[List[RawRecord], Optional[str]]:
        """
        Fetch raw records once.

        Returns:
            Tuple of (records, error_message)
            - On success: (records, None); records may be empty
            - On failure: ([], error_message)
        """
        try:
            records = self._fetch_impl()
        except MissingAPIKeyError as e:
            logger.error(f"Configuration error for {self.source_id}: {e}")
            return [], str(e)
        except FetchError as e:
            if e.body_preview:
                logger.error(f"Fetch failed for {self.source_id}: {e.message} (body: {e.body_preview})")
            else:
                logger.error(f"Fetch failed for {self.source_id}: {e.message}")
            return [], str(e)

        logger.info(f"Fetched {len(records)} raw record(s) from {self.source_id}")
        return records, None
