"""In-process lifecycle hooks for embedding the sync in a host."""

from collections.abc import Sequence
from typing import Any

import structlog

from indexsync.collections import AllowList
from indexsync.config import Settings
from indexsync.enrichment import TimestampEnricher
from indexsync.events.types import Record
from indexsync.search.client import ClientHandle
from indexsync.search.index import SearchIndex
from indexsync.search.schemas import SyncResult
from indexsync.search.synchronizer import IndexSynchronizer

logger = structlog.get_logger()


class IndexSyncExtension:
    """Implements every lifecycle hook by delegating to its components.

    Pre-persist hooks go to the TimestampEnricher and post-persist hooks to
    the IndexSynchronizer; both share one allow-list. The host calls
    ``start`` once, then invokes hooks as records change.
    """

    def __init__(
        self,
        synchronizer: IndexSynchronizer,
        enricher: TimestampEnricher,
        search_index: SearchIndex,
    ) -> None:
        self.synchronizer = synchronizer
        self.enricher = enricher
        self.search_index = search_index

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        handle: ClientHandle | None = None,
    ) -> "IndexSyncExtension":
        """Wire the components from configuration.

        Args:
            settings: Service configuration.
            handle: Shared client handle. Built from settings if None.

        Returns:
            Ready-to-start extension.
        """
        allow_list = AllowList(settings.indexed_collections)
        search_index = SearchIndex(
            handle or ClientHandle(settings),
            settings.elasticsearch_index,
        )
        return cls(
            synchronizer=IndexSynchronizer(
                search_index,
                allow_list=allow_list,
                primary_key=settings.primary_key_field,
            ),
            enricher=TimestampEnricher(allow_list),
            search_index=search_index,
        )

    async def start(self) -> bool:
        """Probe the search engine once and log the configuration.

        A failed probe is logged only; hooks keep working and each
        operation reports its own failure.

        Returns:
            Whether the search engine answered.
        """
        connected = await self.search_index.check_connection()
        logger.info(
            "index_sync_loaded",
            index=self.search_index.name,
            collections=self.synchronizer.allow_list.describe(),
            connected=connected,
        )
        return connected

    async def record_about_to_be_created(
        self, collection: str, payload: Record
    ) -> Record:
        return await self.enricher.record_about_to_be_created(collection, payload)

    async def record_about_to_be_updated(
        self, collection: str, payload: Record
    ) -> Record:
        return await self.enricher.record_about_to_be_updated(collection, payload)

    async def record_created(self, collection: str, record: Record) -> SyncResult:
        return await self.synchronizer.record_created(collection, record)

    async def record_updated(self, collection: str, record: Record) -> SyncResult:
        return await self.synchronizer.record_updated(collection, record)

    async def record_deleted(self, collection: str, record: Any) -> SyncResult:
        return await self.synchronizer.record_deleted(collection, record)

    async def batch_created(
        self, collection: str, records: Sequence[Record]
    ) -> list[SyncResult]:
        return await self.synchronizer.batch_created(collection, records)

    async def batch_updated(
        self, collection: str, records: Sequence[Record]
    ) -> list[SyncResult]:
        return await self.synchronizer.batch_updated(collection, records)

    async def batch_deleted(
        self, collection: str, records: Sequence[Any]
    ) -> list[SyncResult]:
        return await self.synchronizer.batch_deleted(collection, records)
