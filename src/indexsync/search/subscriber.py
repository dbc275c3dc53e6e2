"""Event bus subscriber for keeping the search index in sync."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from indexsync.events.bus import EventBus

if TYPE_CHECKING:
    from indexsync.events.dispatcher import HookDispatcher

logger = structlog.get_logger()


async def run_index_subscriber(
    event_bus: EventBus,
    dispatcher: HookDispatcher,
    started: asyncio.Event | None = None,
) -> None:
    """Subscribe to action notifications and apply them to the index.

    Runs as a long-lived asyncio task. Notifications are applied one at a
    time in arrival order, so later writes to a record always win.

    Args:
        event_bus: Application event bus instance.
        dispatcher: Dispatcher routing notifications to the synchronizer.
        started: Set once the subscription is registered.
    """
    subscriber_id, notifications = await event_bus.subscribe()
    logger.info("index_subscriber_started", subscriber_id=subscriber_id)
    if started is not None:
        started.set()

    try:
        async for notification in notifications:
            try:
                await dispatcher.dispatch(notification)
            except ValueError as e:
                logger.warning(
                    "notification_rejected",
                    notification_id=notification.id,
                    event_type=notification.type.value,
                    error=str(e),
                )
    except asyncio.CancelledError:
        logger.info("index_subscriber_stopped", subscriber_id=subscriber_id)
        raise
