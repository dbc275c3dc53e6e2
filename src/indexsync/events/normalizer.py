"""Normalization of raw host notifications into typed notifications."""

import uuid
from datetime import UTC, datetime
from typing import Any

from indexsync.events.types import ACTION_EVENTS, LifecycleEvent, Notification


def normalize_action(
    event_type: LifecycleEvent,
    collection: str,
    records: Any,
) -> Notification:
    """Build an action notification from a raw host payload.

    Single-record events accept either one record or a one-element list.
    Batch events require a list.

    Args:
        event_type: Lifecycle event reported by the host.
        collection: Source collection name.
        records: Record, record reference, or list of them.

    Returns:
        Typed notification ready for dispatch.

    Raises:
        ValueError: If the event is not an action or the record shape
            does not match the event.
    """
    if event_type not in ACTION_EVENTS:
        raise ValueError(f"{event_type.value} is not an action notification")

    if event_type.is_batch:
        if not isinstance(records, list):
            raise ValueError(f"{event_type.value} requires a list of records")
        items = records
    elif isinstance(records, list):
        if len(records) != 1:
            raise ValueError(f"{event_type.value} requires exactly one record")
        items = records
    else:
        items = [records]

    return Notification(
        id=str(uuid.uuid4()),
        type=event_type,
        timestamp=datetime.now(UTC),
        collection=collection,
        records=items,
    )
