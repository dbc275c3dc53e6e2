"""Mirrors CMS record lifecycle actions into the search index."""

from collections.abc import Mapping, Sequence
from typing import Any

import structlog

from indexsync.collections import AllowList
from indexsync.events.types import Record
from indexsync.search.index import SearchIndex
from indexsync.search.schemas import SyncResult, SyncStatus

logger = structlog.get_logger()


def record_key(record: Any, primary_key: str = "id") -> Any:
    """Extract a record identifier from a record or bare key.

    Args:
        record: Record mapping, or the key itself.
        primary_key: Field holding the identifier in a mapping.

    Returns:
        The identifier, or None when it cannot be determined.
    """
    if isinstance(record, Mapping):
        return record.get(primary_key)
    return record


class IndexSynchronizer:
    """Applies record create/update/delete actions to the search index.

    Every operation resolves to a SyncResult; indexing failures are logged
    and never raised, so a search outage cannot fail a data write. Batches
    are applied one record at a time in input order.
    """

    def __init__(
        self,
        index: SearchIndex,
        allow_list: AllowList | None = None,
        primary_key: str = "id",
    ) -> None:
        """Initialize synchronizer.

        Args:
            index: Target search index.
            allow_list: Collections to sync. Defaults to every collection.
            primary_key: Record field holding the identifier.
        """
        self._index = index
        self._allow_list = allow_list or AllowList()
        self._primary_key = primary_key

    @property
    def allow_list(self) -> AllowList:
        return self._allow_list

    def should_index(self, collection: str) -> bool:
        """Whether notifications for a collection reach the index."""
        return collection in self._allow_list

    async def record_created(self, collection: str, record: Record) -> SyncResult:
        """Index a newly created record."""
        if not self.should_index(collection):
            return self._skipped(collection, record)
        logger.debug("record_created", collection=collection)
        return await self._upsert(collection, record)

    async def record_updated(self, collection: str, record: Record) -> SyncResult:
        """Re-index an updated record, replacing the stored document."""
        if not self.should_index(collection):
            return self._skipped(collection, record)
        logger.debug("record_updated", collection=collection)
        return await self._upsert(collection, record)

    async def record_deleted(self, collection: str, record: Any) -> SyncResult:
        """Remove a deleted record from the index."""
        if not self.should_index(collection):
            return self._skipped(collection, record)
        logger.debug("record_deleted", collection=collection)
        return await self._delete(collection, record)

    async def batch_created(
        self, collection: str, records: Sequence[Record]
    ) -> list[SyncResult]:
        """Index each record of a batch create, in order."""
        if not self.should_index(collection):
            return [self._skipped(collection, r) for r in records]
        logger.info("batch_created", collection=collection, count=len(records))
        return [await self._upsert(collection, r) for r in records]

    async def batch_updated(
        self, collection: str, records: Sequence[Record]
    ) -> list[SyncResult]:
        """Re-index each record of a batch update, in order."""
        if not self.should_index(collection):
            return [self._skipped(collection, r) for r in records]
        logger.info("batch_updated", collection=collection, count=len(records))
        return [await self._upsert(collection, r) for r in records]

    async def batch_deleted(
        self, collection: str, records: Sequence[Any]
    ) -> list[SyncResult]:
        """Remove each record of a batch delete, in order."""
        if not self.should_index(collection):
            return [self._skipped(collection, r) for r in records]
        logger.info("batch_deleted", collection=collection, count=len(records))
        return [await self._delete(collection, r) for r in records]

    def _skipped(self, collection: str, record: Any) -> SyncResult:
        return SyncResult(
            collection=collection,
            record_id=record_key(record, self._primary_key),
            status=SyncStatus.SKIPPED,
        )

    async def _upsert(self, collection: str, record: Any) -> SyncResult:
        if not isinstance(record, Mapping):
            return self._failed(collection, None, "record is not a mapping", "index")

        record_id = record.get(self._primary_key)
        if record_id is None:
            return self._failed(
                collection, None, f"record has no '{self._primary_key}'", "index"
            )

        try:
            await self._index.upsert_document(collection, record_id, dict(record))
        except Exception as e:
            return self._failed(collection, record_id, str(e), "index")

        logger.info("document_indexed", collection=collection, record_id=record_id)
        return SyncResult(
            collection=collection, record_id=record_id, status=SyncStatus.INDEXED
        )

    async def _delete(self, collection: str, record: Any) -> SyncResult:
        record_id = record_key(record, self._primary_key)
        if record_id is None:
            return self._failed(
                collection, None, f"record has no '{self._primary_key}'", "delete"
            )

        try:
            deleted = await self._index.delete_document(collection, record_id)
        except Exception as e:
            return self._failed(collection, record_id, str(e), "delete")

        if not deleted:
            logger.debug(
                "document_already_absent", collection=collection, record_id=record_id
            )
            return SyncResult(
                collection=collection, record_id=record_id, status=SyncStatus.NOT_FOUND
            )

        logger.info("document_deleted", collection=collection, record_id=record_id)
        return SyncResult(
            collection=collection, record_id=record_id, status=SyncStatus.DELETED
        )

    def _failed(
        self, collection: str, record_id: Any, error: str, operation: str
    ) -> SyncResult:
        logger.error(
            f"document_{operation}_failed",
            collection=collection,
            record_id=record_id,
            index=self._index.name,
            error=error,
        )
        return SyncResult(
            collection=collection,
            record_id=record_id,
            status=SyncStatus.FAILED,
            error=error,
        )
