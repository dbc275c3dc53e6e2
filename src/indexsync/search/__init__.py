"""Elasticsearch index synchronization for CMS records."""

from indexsync.search.client import ClientHandle, create_client
from indexsync.search.index import SearchIndex, document_id
from indexsync.search.schemas import SearchHit, SearchResponse, SyncResult, SyncStatus
from indexsync.search.subscriber import run_index_subscriber
from indexsync.search.synchronizer import IndexSynchronizer

__all__ = [
    "ClientHandle",
    "IndexSynchronizer",
    "SearchHit",
    "SearchIndex",
    "SearchResponse",
    "SyncResult",
    "SyncStatus",
    "create_client",
    "document_id",
    "run_index_subscriber",
]
