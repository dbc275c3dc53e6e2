"""Lifecycle notification types delivered by the host CMS."""
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

Record = dict[str, Any]


class LifecycleEvent(str, Enum):
    """Lifecycle notifications emitted around record persistence."""

    RECORD_CREATING = "record.creating"
    RECORD_UPDATING = "record.updating"
    RECORD_CREATED = "record.created"
    RECORD_UPDATED = "record.updated"
    RECORD_DELETED = "record.deleted"
    BATCH_CREATED = "batch.created"
    BATCH_UPDATED = "batch.updated"
    BATCH_DELETED = "batch.deleted"

    @property
    def is_filter(self) -> bool:
        """Whether this is a pre-persist notification returning a payload."""
        return self in FILTER_EVENTS

    @property
    def is_batch(self) -> bool:
        """Whether this notification carries a sequence of records."""
        return self in BATCH_EVENTS


FILTER_EVENTS: frozenset[LifecycleEvent] = frozenset(
    {
        LifecycleEvent.RECORD_CREATING,
        LifecycleEvent.RECORD_UPDATING,
    }
)

BATCH_EVENTS: frozenset[LifecycleEvent] = frozenset(
    {
        LifecycleEvent.BATCH_CREATED,
        LifecycleEvent.BATCH_UPDATED,
        LifecycleEvent.BATCH_DELETED,
    }
)

ACTION_EVENTS: frozenset[LifecycleEvent] = frozenset(
    event for event in LifecycleEvent if event not in FILTER_EVENTS
)


class Notification(BaseModel):
    """Typed lifecycle notification for a collection.

    Single-record notifications carry exactly one entry in ``records``.
    Delete notifications may carry bare keys instead of mappings.

    Attributes:
        id: Unique notification identifier (UUID).
        type: Lifecycle event that triggered the notification.
        timestamp: Notification timestamp in UTC.
        collection: Collection the records belong to.
        records: Record payloads or record references.
    """

    id: str = Field(description="Unique notification identifier (UUID)")
    type: LifecycleEvent = Field(description="Lifecycle event type")
    timestamp: datetime = Field(description="Notification timestamp (UTC)")
    collection: str = Field(min_length=1, description="Source collection")
    records: list[Any] = Field(default_factory=list, description="Records or keys")
