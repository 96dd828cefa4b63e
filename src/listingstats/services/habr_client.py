"""Habr hub article source."""

import hashlib
import logging
import re
from typing import Optional

from ..core.config import settings
from ..core.constants import CacheConstants, SelectorConstants
from ..core.models import Page, RawRecord
from .html_source import HtmlSource

logger = logging.getLogger(__name__)

ARTICLE_ID_RE = re.compile(r"/(\d+)/?$")


def article_id(link: Optional[str]) -> Optional[str]:
    """Numeric post id from an article link, or a hash of the link."""
    if not link:
        return None
    match = ARTICLE_ID_RE.search(link.split("?")[0])
    if match:
        return match.group(1)
    return hashlib.md5(link.encode("utf-8")).hexdigest()[:CacheConstants.CACHE_KEY_LENGTH]


class HabrArticleSource(HtmlSource):
    """Article lists of a Habr hub, ``/ru/hub/<hub>/page<N>/`` (pages start at 1)."""

    name = "habr"
    first_page = 1
    default_selectors = SelectorConstants.HABR

    def __init__(self, http=None, base_url: Optional[str] = None, selectors=None):
        super().__init__(base_url or settings.habr_base_url, http=http, selectors=selectors)

    def page_url(self, hub: str, page: int) -> str:
        return f"{self.base_url}/ru/hub/{hub}/page{page}/"

    def fetch_page(self, query: str, page: int, page_size: int) -> Page:
        html = self.http.get_text(self.page_url(query, page))
        return self.parse_page(html)

    def parse_page(self, html: str) -> Page:
        nodes = self.soup(html).select(self.selectors["item"])
        if not nodes:
            return Page(items=[], container_found=False)

        items = []
        for node in nodes:
            try:
                items.append(self._parse_article(node))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Failed to parse article card: {e}")
        return Page(items=items)

    def _parse_article(self, node) -> RawRecord:
        link = self.absolute(self.attr(node, "title", "href"))
        return {
            "id": article_id(link),
            "title": self.text(node, "title"),
            "link": link,
            "author": self.text(node, "author"),
            "published": self.attr(node, "date", "datetime"),
            "rating": self.text(node, "rating"),
            "views": self.text(node, "views"),
            "comments": self.text(node, "comments"),
        }
