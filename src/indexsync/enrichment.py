"""Pre-persist timestamp stamping for CMS record payloads."""

from collections.abc import Callable
from datetime import UTC, datetime

import structlog

from indexsync.collections import AllowList
from indexsync.events.types import Record

logger = structlog.get_logger()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TimestampEnricher:
    """Stamps creation and modification times onto outgoing payloads.

    Independent of indexing: it touches only the payload on its way to the
    primary store and never talks to the search engine. Payloads are copied,
    not mutated in place.
    """

    def __init__(
        self,
        allow_list: AllowList | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize enricher.

        Args:
            allow_list: Collections to enrich. Defaults to every collection.
            clock: Source of the current UTC time.
        """
        self._allow_list = allow_list or AllowList()
        self._clock = clock

    async def record_about_to_be_created(
        self, collection: str, payload: Record
    ) -> Record:
        """Set ``created_at`` unless the payload already carries one."""
        if collection not in self._allow_list:
            return payload

        enriched = dict(payload)
        if not enriched.get("created_at"):
            enriched["created_at"] = self._clock().isoformat()
        logger.debug("payload_enriched", collection=collection, hook="create")
        return enriched

    async def record_about_to_be_updated(
        self, collection: str, payload: Record
    ) -> Record:
        """Overwrite ``updated_at`` with the current time."""
        if collection not in self._allow_list:
            return payload

        enriched = dict(payload)
        enriched["updated_at"] = self._clock().isoformat()
        logger.debug("payload_enriched", collection=collection, hook="update")
        return enriched
