"""Record stores: where the raw items of a collection come from."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import requests

from ..core.config import settings
from ..core.models import Page, RawRecord
from .blob_store import BlobStore

logger = logging.getLogger(__name__)


class Source(ABC):
    """A paginated remote endpoint yielding raw items."""

    name = "source"
    first_page = 0

    @abstractmethod
    def fetch_page(self, query: str, page: int, page_size: int) -> Page:
        """Fetch one page. Transport errors propagate as requests exceptions."""

    def item_id(self, raw: RawRecord) -> Optional[str]:
        ident = raw.get("id")
        return str(ident) if ident not in (None, "") else None


class RecordStore(ABC):
    """Get all items of a named collection."""

    @abstractmethod
    async def fetch(self, collection: str, query: Optional[str] = None) -> List[RawRecord]:
        ...


class ReplayRecordStore(RecordStore):
    """Replays items previously cached in a blob directory."""

    def __init__(self, blobs: BlobStore):
        self.blobs = blobs

    async def fetch(self, collection: str, query: Optional[str] = None) -> List[RawRecord]:
        return self.blobs.load_all(collection)


class LiveRecordStore(RecordStore):
    """
    Fetches a collection page by page from a source.

    Pagination stops at the first empty page, at the source's reported page
    count, or after ``max_pages``. A transport failure ends pagination for
    this collection only; items collected before it are returned. Pages
    without an item container are skipped. Every item with an id is written
    to ``blobs`` when a blob store is given.
    """

    def __init__(
        self,
        source: Source,
        blobs: Optional[BlobStore] = None,
        page_size: int = 100,
        max_pages: int = 20,
        delay: Optional[float] = None,
    ):
        self.source = source
        self.blobs = blobs
        self.page_size = page_size
        self.max_pages = max_pages
        self.delay = settings.request_delay if delay is None else delay

    async def fetch(self, collection: str, query: Optional[str] = None) -> List[RawRecord]:
        query = query or collection
        items: List[RawRecord] = []

        for index in range(self.max_pages):
            page_no = self.source.first_page + index
            if index > 0:
                await asyncio.sleep(self.delay)

            logger.info(f"{self.source.name}: fetching page {page_no} of '{collection}'")
            try:
                page = await asyncio.to_thread(self.source.fetch_page, query, page_no, self.page_size)
            except requests.RequestException as e:
                logger.error(
                    f"{self.source.name}: page {page_no} of '{collection}' failed, "
                    f"keeping {len(items)} items: {e}"
                )
                break

            if not page.container_found:
                logger.warning(f"{self.source.name}: no item list on page {page_no}, moving on")
                continue
            if not page.items:
                break

            for raw in page.items:
                items.append(raw)
                self._persist(collection, raw)

            if page.total_pages is not None and index + 1 >= page.total_pages:
                break

        logger.info(f"✅ {self.source.name}: collected {len(items)} items for '{collection}'")
        return items

    def _persist(self, collection: str, raw: RawRecord) -> None:
        if self.blobs is None:
            return
        item_id = self.source.item_id(raw)
        if item_id is None:
            return
        try:
            self.blobs.put(collection, item_id, raw)
        except OSError as e:
            logger.error(f"Failed to cache item {item_id} of '{collection}': {e}")
