"""HTML medal-table scraper using CSS selectors."""

import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from .base_fetcher import BaseFetcher, FetchError, RawRecord, preview_text, DEFAULT_PREVIEW_CHARS
from ..config.settings import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

_session = requests.Session()

# Realistic browser headers to avoid blocking
DEFAULT_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.9',
    'Connection': 'keep-alive',
    'Upgrade-Insecure-Requests': '1',
}

# Tried in order; the first match wins before falling back to any <table>
MEDALS_TABLE_SELECTORS = (
    'table#medals',
    '#medals table',
    'table.medals',
    '.medals table',
    '[id*="medals"] table',
)

# rank, country, gold, silver, bronze
MIN_ROW_CELLS = 5

_DIGITS_RE = re.compile(r'-?\d[\d,]*')


def parse_count(text: Optional[str]) -> int:
    """Parse a medal count from cell text; anything non-numeric is 0."""
    if not text:
        return 0
    match = _DIGITS_RE.search(text)
    if not match:
        return 0
    try:
        value = int(match.group(0).replace(',', ''))
    except ValueError:
        return 0
    return max(value, 0)


def find_medals_table(soup: BeautifulSoup):
    """Locate the medals table, preferring one scoped by a ``medals`` id/class."""
    for selector in MEDALS_TABLE_SELECTORS:
        table = soup.select_one(selector)
        if table is not None:
            return table
    return soup.find('table')


def extract_rows(table, base_url: str = '') -> List[RawRecord]:
    """
    Extract one raw record per data row of a medals table.

    Rows with fewer than five cells, or made only of header cells, are skipped.
    Header rows written with <td> cells are recognised by having no digits in
    any medal column before the first data row.
    """
    records = []
    seen_data = False

    for row in table.find_all('tr'):
        cells = row.find_all(['td', 'th'])
        if len(cells) < MIN_ROW_CELLS:
            continue
        if all(cell.name == 'th' for cell in cells):
            continue

        medal_texts = [cell.get_text(strip=True) for cell in cells[2:MIN_ROW_CELLS]]
        if not seen_data:
            if not any(_DIGITS_RE.search(text) for text in medal_texts):
                continue
            seen_data = True

        country_cell = cells[1]
        country = country_cell.get_text(' ', strip=True)

        flag_url = ''
        img = country_cell.find('img')
        if img is not None:
            src = img.get('src') or img.get('data-src') or ''
            flag_url = urljoin(base_url, src) if src and base_url else src

        record: RawRecord = {
            'country': country,
            'flag_url': flag_url,
            'gold': parse_count(medal_texts[0]),
            'silver': parse_count(medal_texts[1]),
            'bronze': parse_count(medal_texts[2]),
        }

        if len(cells) > MIN_ROW_CELLS:
            total_text = cells[MIN_ROW_CELLS].get_text(strip=True)
            if _DIGITS_RE.search(total_text):
                record['total'] = parse_count(total_text)

        records.append(record)

    return records


class HtmlFetcher(BaseFetcher):
    """Scrape medal counts from a public HTML medal table."""

    source_id = "medals_html"

    def __init__(self, source_config: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None):
        merged = dict(DEFAULT_CONFIG["html"])
        merged.update(source_config or {})
        super().__init__(merged, timeout)

    def _fetch_impl(self) -> List[RawRecord]:
        page_url = self.config['url']
        preview_chars = self.config.get('preview_chars', DEFAULT_PREVIEW_CHARS)

        try:
            response = _session.get(page_url, headers=DEFAULT_HEADERS, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(self.source_id, f"Web fetch failed for {page_url}: {e}", e) from e

        if not response.ok:
            raise FetchError(
                self.source_id,
                f"HTTP {response.status_code} from {page_url}",
                status_code=response.status_code,
                body_preview=preview_text(response.text, preview_chars),
            )

        soup = BeautifulSoup(response.text, 'lxml')

        table = find_medals_table(soup)
        if table is None:
            raise FetchError(self.source_id, f"No medals table found at {page_url}")

        records = extract_rows(table, base_url=page_url)
        if not records:
            logger.warning(f"Medals table at {page_url} had no data rows")
        return records
