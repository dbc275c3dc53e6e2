"""Routes lifecycle notifications to the sync components."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from indexsync.events.hooks import ActionHooks, FilterHooks
from indexsync.events.types import LifecycleEvent, Notification, Record

if TYPE_CHECKING:
    from indexsync.search.schemas import SyncResult

logger = structlog.get_logger()


class HookDispatcher:
    """Explicit dispatch table from lifecycle events to hook methods.

    Actions go to the index synchronizer, filters to the payload enricher.
    The two never depend on each other.
    """

    def __init__(self, actions: ActionHooks, filters: FilterHooks) -> None:
        """Initialize dispatcher.

        Args:
            actions: Post-persist handler (index synchronizer).
            filters: Pre-persist handler (payload enricher).
        """
        self._actions = actions
        self._filters = filters

    async def apply_filter(
        self,
        event_type: LifecycleEvent,
        collection: str,
        payload: Record,
    ) -> Record:
        """Run a pre-persist notification and return the payload to store.

        Args:
            event_type: RECORD_CREATING or RECORD_UPDATING.
            collection: Target collection.
            payload: Payload about to be persisted.

        Returns:
            Possibly enriched payload.

        Raises:
            ValueError: If the event is not a filter notification.
        """
        if event_type is LifecycleEvent.RECORD_CREATING:
            return await self._filters.record_about_to_be_created(collection, payload)
        if event_type is LifecycleEvent.RECORD_UPDATING:
            return await self._filters.record_about_to_be_updated(collection, payload)
        raise ValueError(f"{event_type.value} is not a filter notification")

    async def dispatch(self, notification: Notification) -> list[SyncResult]:
        """Apply an action notification to the index.

        Args:
            notification: Normalized action notification.

        Returns:
            One result per record carried by the notification.

        Raises:
            ValueError: If the notification is a filter notification.
        """
        collection = notification.collection
        records = notification.records
        actions = self._actions

        event_type = notification.type

        if event_type is LifecycleEvent.RECORD_CREATED:
            results = [await actions.record_created(collection, records[0])]
        elif event_type is LifecycleEvent.RECORD_UPDATED:
            results = [await actions.record_updated(collection, records[0])]
        elif event_type is LifecycleEvent.RECORD_DELETED:
            results = [await actions.record_deleted(collection, records[0])]
        elif event_type is LifecycleEvent.BATCH_CREATED:
            results = await actions.batch_created(collection, records)
        elif event_type is LifecycleEvent.BATCH_UPDATED:
            results = await actions.batch_updated(collection, records)
        elif event_type is LifecycleEvent.BATCH_DELETED:
            results = await actions.batch_deleted(collection, records)
        else:
            raise ValueError(f"{event_type.value} is not an action notification")

        logger.debug(
            "notification_dispatched",
            notification_id=notification.id,
            event_type=notification.type.value,
            collection=collection,
            records=len(results),
        )
        return results
