"""Elasticsearch-backed index of CMS records."""

from datetime import UTC, datetime
from typing import Any

import structlog
from elastic_transport import TransportError
from elasticsearch import ApiError, BadRequestError, NotFoundError

from indexsync.search.client import ClientHandle
from indexsync.search.schemas import SearchHit, SearchResponse

logger = structlog.get_logger()

INDEX_SETTINGS: dict[str, Any] = {
    "number_of_shards": 1,
    "number_of_replicas": 0,
}

# Only identity fields are mapped; payload fields use dynamic mapping.
INDEX_MAPPINGS: dict[str, Any] = {
    "properties": {
        "collection": {"type": "keyword"},
        "item_id": {"type": "keyword"},
        "indexed_at": {"type": "date"},
    }
}

_ALREADY_EXISTS = "resource_already_exists_exception"


def document_id(collection: str, record_id: Any) -> str:
    """Build the index-wide document identifier for a record.

    Args:
        collection: Source collection name.
        record_id: Record identifier within the collection.

    Returns:
        Identifier of the form ``<collection>_<record_id>``.
    """
    return f"{collection}_{record_id}"


def build_document(
    collection: str,
    record_id: Any,
    payload: dict[str, Any],
    indexed_at: datetime | None = None,
) -> dict[str, Any]:
    """Assemble the full document body written for a record.

    Identity and timestamp fields are applied after the payload so a
    payload cannot overwrite them.

    Args:
        collection: Source collection name.
        record_id: Record identifier within the collection.
        payload: Record fields to index.
        indexed_at: Sync timestamp, defaults to now (UTC).

    Returns:
        Document body.
    """
    stamp = indexed_at or datetime.now(UTC)
    return {
        **payload,
        "collection": collection,
        "item_id": record_id,
        "indexed_at": stamp.isoformat(),
    }


def _is_already_exists(error: ApiError) -> bool:
    if getattr(error, "error", None) == _ALREADY_EXISTS:
        return True
    return _ALREADY_EXISTS in str(error.body)


class SearchIndex:
    """Single named Elasticsearch index holding every synced collection.

    The index is checked before every write and created with fixed settings
    and mapping when missing, so an index deleted out from under the service
    is provisioned again on the next write.
    """

    def __init__(self, handle: ClientHandle, name: str) -> None:
        """Initialize index wrapper (no network traffic).

        Args:
            handle: Shared client handle.
            name: Index name.
        """
        self._handle = handle
        self._name = name

    @property
    def name(self) -> str:
        """Index name."""
        return self._name

    async def ensure_index(self) -> None:
        """Create the index with settings and mapping if it is missing.

        A concurrent creator winning the race is not an error.
        """
        client = self._handle.get()
        exists = await client.indices.exists(index=self._name)
        if not exists:
            try:
                await client.indices.create(
                    index=self._name,
                    settings=INDEX_SETTINGS,
                    mappings=INDEX_MAPPINGS,
                )
                logger.info("index_created", index=self._name)
            except BadRequestError as e:
                if not _is_already_exists(e):
                    raise
                logger.debug("index_already_exists", index=self._name)

    async def upsert_document(
        self,
        collection: str,
        record_id: Any,
        payload: dict[str, Any],
    ) -> str:
        """Write a record, replacing any previous version in full.

        Args:
            collection: Source collection name.
            record_id: Record identifier within the collection.
            payload: Record fields to index.

        Returns:
            Composite document identifier written.
        """
        await self.ensure_index()

        doc_id = document_id(collection, record_id)
        await self._handle.get().index(
            index=self._name,
            id=doc_id,
            document=build_document(collection, record_id, payload),
        )
        return doc_id

    async def delete_document(self, collection: str, record_id: Any) -> bool:
        """Remove a record's document.

        Args:
            collection: Source collection name.
            record_id: Record identifier within the collection.

        Returns:
            True if a document was deleted, False if none existed.
        """
        try:
            await self._handle.get().delete(
                index=self._name,
                id=document_id(collection, record_id),
            )
        except NotFoundError:
            return False
        return True

    async def server_version(self) -> str:
        """Fetch the search engine version via cluster info.

        Returns:
            Version number reported by the cluster.
        """
        info = await self._handle.get().info()
        return str(info["version"]["number"])

    async def check_connection(self) -> bool:
        """Probe the search engine once and log the outcome.

        Returns:
            True if the cluster answered, False otherwise.
        """
        try:
            version = await self.server_version()
        except (ApiError, TransportError) as e:
            logger.error("elasticsearch_connection_failed", error=str(e))
            return False

        logger.info("elasticsearch_connected", version=version)
        return True

    async def search(
        self,
        query: str,
        collection: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> SearchResponse:
        """Run a simple query string search over indexed documents.

        Args:
            query: Raw user query, passed to the engine's query parser.
            collection: Optional collection filter.
            limit: Maximum results to return.
            offset: Number of results to skip.

        Returns:
            SearchResponse with engine-ranked hits and pagination metadata.
        """
        filters: list[dict[str, Any]] = []
        if collection:
            filters.append({"term": {"collection": collection}})

        try:
            response = await self._handle.get().search(
                index=self._name,
                query={
                    "bool": {
                        "must": {"simple_query_string": {"query": query}},
                        "filter": filters,
                    }
                },
                from_=offset,
                size=limit,
            )
        except NotFoundError:
            return SearchResponse(
                query=query, results=[], total=0, limit=limit, offset=offset
            )
        except (ApiError, TransportError) as e:
            logger.warning("search_query_failed", query=query, error=str(e))
            return SearchResponse(
                query=query, results=[], total=0, limit=limit, offset=offset
            )

        hits = response["hits"]
        results = [
            SearchHit(
                id=hit["_id"],
                collection=str(hit["_source"].get("collection", "")),
                item_id=str(hit["_source"].get("item_id", "")),
                score=hit.get("_score"),
                source=hit["_source"],
            )
            for hit in hits["hits"]
        ]

        return SearchResponse(
            query=query,
            results=results,
            total=hits["total"]["value"],
            limit=limit,
            offset=offset,
        )
