"""Pydantic schemas for sync outcomes and search API responses."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class SyncStatus(str, Enum):
    """Outcome of a single synchronization operation."""

    INDEXED = "indexed"
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    SKIPPED = "skipped"
    FAILED = "failed"


class SyncResult(BaseModel):
    """Resolved outcome of syncing one record.

    Failures are recorded here and in the log but never raised, so every
    result counts as handled from the caller's point of view.

    Attributes:
        collection: Source collection name.
        record_id: Record identifier, if one could be determined.
        status: What happened to the indexed document.
        error: Error message when status is failed.
    """

    collection: str
    record_id: Any = None
    status: SyncStatus
    error: str | None = None

    @property
    def handled(self) -> bool:
        """Always True: indexing failures never fail the caller."""
        return True

    @property
    def ok(self) -> bool:
        """Whether the index reflects the change (or had nothing to do)."""
        return self.status is not SyncStatus.FAILED


class SearchHit(BaseModel):
    """Individual search hit.

    Attributes:
        id: Composite document identifier.
        collection: Source collection of the record.
        item_id: Record identifier within the collection.
        score: Relevance score reported by the engine.
        source: Indexed document fields.
    """

    id: str
    collection: str
    item_id: str
    score: float | None = None
    source: dict[str, Any] = Field(default_factory=dict)


class SearchResponse(BaseModel):
    """Paginated search response envelope.

    Attributes:
        query: The original search query string.
        results: List of matched documents.
        total: Total number of matching documents.
        limit: Maximum results per page.
        offset: Number of results skipped.
    """

    query: str
    results: list[SearchHit]
    total: int
    limit: int
    offset: int
