"""Directory of cached items, one JSON blob per item id."""

import json
import logging
from pathlib import Path
from typing import List
from urllib.parse import quote

from ..core.constants import CacheConstants
from ..core.models import RawRecord

logger = logging.getLogger(__name__)


def safe_name(name: str) -> str:
    """Percent-encode a name into a single path component, reversibly."""
    encoded = quote(str(name), safe="")
    if encoded.startswith("."):
        encoded = "%2E" + encoded[1:]
    return encoded


class BlobStore:
    """
    Key-value store of raw items.

    Layout: ``<root>/<collection>/<item id>.json``. Each collection is its own
    directory, so writers of different collections never touch the same files.
    """

    def __init__(self, root):
        self.root = Path(root)

    def collection_dir(self, collection: str) -> Path:
        return self.root / safe_name(collection)

    def path_for(self, collection: str, item_id: str) -> Path:
        return self.collection_dir(collection) / f"{safe_name(item_id)}{CacheConstants.BLOB_SUFFIX}"

    def put(self, collection: str, item_id: str, record: RawRecord) -> Path:
        """Write one item, replacing any earlier blob with the same id."""
        path = self.path_for(collection, item_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(record, f, ensure_ascii=False, indent=2)
        return path

    def load_all(self, collection: str) -> List[RawRecord]:
        """Read every blob of a collection; unreadable blobs are skipped."""
        directory = self.collection_dir(collection)
        if not directory.is_dir():
            logger.warning(f"No cached items for collection '{collection}' in {directory}")
            return []

        records = []
        for path in sorted(directory.glob(f"*{CacheConstants.BLOB_SUFFIX}")):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    record = json.load(f)
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                logger.warning(f"Skipping unreadable blob {path.name}: {e}")
                continue
            if not isinstance(record, dict):
                logger.warning(f"Skipping blob {path.name}: not a JSON object")
                continue
            records.append(record)

        logger.info(f"Loaded {len(records)} cached items for '{collection}'")
        return records
