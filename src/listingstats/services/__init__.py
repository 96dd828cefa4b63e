"""Services for ListingStats."""

from .blob_store import BlobStore
from .record_store import LiveRecordStore, RecordStore, ReplayRecordStore, Source
from .collection_manager import CollectionManager, CollectionRequest, make_store

__all__ = [
    "BlobStore",
    "RecordStore",
    "ReplayRecordStore",
    "LiveRecordStore",
    "Source",
    "CollectionManager",
    "CollectionRequest",
    "make_store",
]
