"""Structured medals API fetcher (RapidAPI olympic-sports-api).

The endpoint is keyed: requests carry ``X-RapidAPI-Key`` and
``X-RapidAPI-Host``. The response body has drifted between a bare array and
an object wrapping the array, so both shapes are accepted.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from .base_fetcher import BaseFetcher, FetchError, RawRecord, preview_text
from ..config.secrets import get_rapidapi_key
from ..config.settings import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

# Keys that have been seen wrapping the per-country array
ENVELOPE_KEYS = ("results", "medals", "data", "countries")

# Characters of a successful response echoed at DEBUG level
RESPONSE_LOG_CHARS = 500

_session = requests.Session()


def extract_entries(payload: Any) -> List[RawRecord]:
    """
    Pull the per-country array out of an API response body.

    Args:
        payload: Decoded JSON body

    Returns:
        The array (bare, or nested under the first envelope key holding a
        list); an empty list when no array can be found
    """
    if isinstance(payload, list):
        return payload

    if isinstance(payload, dict):
        for key in ENVELOPE_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return value

    return []


class ApiFetcher(BaseFetcher):
    """Fetch medal counts from the keyed JSON API."""

    source_id = "medals_api"

    def __init__(self, source_config: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None):
        merged = dict(DEFAULT_CONFIG["api"])
        merged.update(source_config or {})
        super().__init__(merged, timeout)

    @property
    def url(self) -> str:
        return f"{self.config['base_url'].rstrip('/')}{self.config['endpoint']}"

    def _fetch_impl(self) -> List[RawRecord]:
        api_key = get_rapidapi_key()

        headers = {
            'X-RapidAPI-Key': api_key,
            'X-RapidAPI-Host': self.config['host'],
        }
        params = {'year': str(self.config['year'])}

        try:
            response = _session.get(self.url, headers=headers, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(self.source_id, f"API request failed for {self.url}: {e}", e) from e

        if not response.ok:
            raise FetchError(
                self.source_id,
                f"API returned HTTP {response.status_code} {response.reason}",
                status_code=response.status_code,
                body_preview=preview_text(response.text),
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(
                self.source_id,
                f"API response is not valid JSON: {e}",
                e,
                status_code=response.status_code,
                body_preview=preview_text(response.text),
            ) from e

        logger.debug(f"API response: {preview_text(response.text, RESPONSE_LOG_CHARS)}")

        entries = extract_entries(payload)
        if not entries:
            logger.warning("API returned no medal entries - response shape may have changed")
        return entries
