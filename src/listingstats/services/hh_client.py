"""HeadHunter vacancies source."""

import logging
from typing import Optional

from ..core.config import settings
from ..core.models import Page
from .http_client import HttpClient
from .record_store import Source

logger = logging.getLogger(__name__)


class HHVacancySource(Source):
    """Paginated vacancy search on the HeadHunter JSON API (pages start at 0)."""

    name = "hh"
    first_page = 0

    def __init__(self, http: Optional[HttpClient] = None, base_url: Optional[str] = None):
        self.http = http or HttpClient()
        self.base_url = base_url or settings.hh_base_url

    def fetch_page(self, query: str, page: int, page_size: int) -> Page:
        params = {"text": query, "page": page, "per_page": page_size}
        try:
            data = self.http.get_json(self.base_url, params=params)
        except ValueError as e:
            logger.warning(f"Vacancy page {page} is not valid JSON: {e}")
            return Page(items=[], container_found=False)

        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            logger.warning(f"Vacancy page {page} has no items array")
            return Page(items=[], container_found=False)

        items = []
        for item in data["items"]:
            if isinstance(item, dict):
                items.append(item)
            else:
                logger.warning(f"Skipping malformed vacancy on page {page}: {item!r}")

        total_pages = data.get("pages")
        if isinstance(total_pages, bool) or not isinstance(total_pages, int):
            total_pages = None

        logger.info(f"Found {len(items)} vacancies on page {page} for query: {query}")
        return Page(items=items, total_pages=total_pages)
