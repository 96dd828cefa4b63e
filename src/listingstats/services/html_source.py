"""Shared parsing helpers for HTML sources."""

import logging
from typing import Dict, Optional

from bs4 import BeautifulSoup, Tag

from .http_client import HttpClient
from .record_store import Source

logger = logging.getLogger(__name__)


class HtmlSource(Source):
    """A source that scrapes items out of HTML pages with CSS selectors."""

    default_selectors: Dict[str, str] = {}

    def __init__(
        self,
        base_url: str,
        http: Optional[HttpClient] = None,
        selectors: Optional[Dict[str, str]] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.http = http or HttpClient()
        self.selectors = {**self.default_selectors, **(selectors or {})}

    @staticmethod
    def soup(html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "html.parser")

    def text(self, node: Tag, field: str) -> Optional[str]:
        found = node.select_one(self.selectors[field])
        if found is None:
            return None
        return found.get_text(strip=True)

    def attr(self, node: Tag, field: str, name: str) -> Optional[str]:
        found = node.select_one(self.selectors[field])
        if found is None:
            return None
        return found.get(name)

    def absolute(self, link: Optional[str]) -> Optional[str]:
        if link and not link.startswith("http"):
            return self.base_url + link
        return link
