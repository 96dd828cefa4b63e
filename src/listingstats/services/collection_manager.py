"""Concurrent collection loading: fetch and normalize several collections at once."""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..core.config import settings
from ..core.extract import normalize_all
from ..core.models import RawRecord
from .blob_store import BlobStore
from .record_store import LiveRecordStore, RecordStore, ReplayRecordStore, Source

logger = logging.getLogger(__name__)


@dataclass
class CollectionRequest:
    """What to load: a named collection, its store and its normalizer."""
    collection: str
    store: RecordStore
    normalize: Callable[[RawRecord], Any]
    query: Optional[str] = None


def make_store(
    source: Source,
    offline: bool = False,
    page_size: int = 100,
    max_pages: int = 20,
    cache_dir: Optional[str] = None,
) -> RecordStore:
    """Replay store over the blob cache when offline, live store writing to it otherwise."""
    blobs = BlobStore(cache_dir or settings.cache_dir)
    if offline:
        return ReplayRecordStore(blobs)
    return LiveRecordStore(source, blobs=blobs, page_size=page_size, max_pages=max_pages)


class CollectionManager:
    """Runs the fetch-and-normalize phase of each collection as its own task."""

    async def load(self, request: CollectionRequest) -> List[Any]:
        raws = await request.store.fetch(request.collection, request.query)
        records = normalize_all(raws, request.normalize)
        logger.info(f"Normalized {len(records)} of {len(raws)} items for '{request.collection}'")
        return records

    async def gather(self, requests: Sequence[CollectionRequest]) -> Dict[str, List[Any]]:
        """Load all collections concurrently and wait for every one of them."""
        results = await asyncio.gather(
            *(self.load(request) for request in requests), return_exceptions=True
        )

        collections = {}
        for request, result in zip(requests, results):
            if isinstance(result, Exception):
                logger.error(f"❌ {request.collection}: failed with error: {result}")
                collections[request.collection] = []
            else:
                collections[request.collection] = result
        return collections

    def run(self, requests: Sequence[CollectionRequest]) -> Dict[str, List[Any]]:
        """Blocking entry point around ``gather``."""
        start_time = time.time()
        collections = asyncio.run(self.gather(requests))
        logger.info(f"Loaded {len(collections)} collections in {time.time() - start_time:.1f}s")
        return collections
