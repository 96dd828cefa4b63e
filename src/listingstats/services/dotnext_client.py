"""DotNext conference schedule source."""

import hashlib
import logging
from typing import Optional

from ..core.config import settings
from ..core.constants import CacheConstants, SelectorConstants
from ..core.models import Page, RawRecord
from .html_source import HtmlSource

logger = logging.getLogger(__name__)


def talk_id(speaker: Optional[str], title: Optional[str]) -> str:
    key = f"{speaker or ''}|{title or ''}".lower()
    return hashlib.md5(key.encode("utf-8")).hexdigest()[:CacheConstants.CACHE_KEY_LENGTH]


class DotNextScheduleSource(HtmlSource):
    """Talk cards of a single schedule page. The query is the schedule URL."""

    name = "dotnext"
    first_page = 0
    default_selectors = SelectorConstants.DOTNEXT

    def __init__(self, http=None, base_url: Optional[str] = None, selectors=None):
        super().__init__(base_url or settings.dotnext_schedule_url, http=http, selectors=selectors)

    def fetch_page(self, query: str, page: int, page_size: int) -> Page:
        url = query if query.startswith("http") else self.base_url
        html = self.http.get_text(url)
        return self.parse_page(html)

    def parse_page(self, html: str) -> Page:
        nodes = self.soup(html).select(self.selectors["item"])
        if not nodes:
            logger.warning("No schedule items found, the page layout may have changed")
            return Page(items=[], total_pages=1, container_found=False)

        items = []
        for node in nodes:
            try:
                items.append(self._parse_talk(node))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Failed to parse talk card: {e}")
        return Page(items=items, total_pages=1)

    def _parse_talk(self, node) -> RawRecord:
        speaker = self.text(node, "speaker")
        title = self.text(node, "title")
        return {
            "id": talk_id(speaker, title),
            "company": self.text(node, "company"),
            "speaker": speaker,
            "title": title,
        }
