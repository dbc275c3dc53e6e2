"""Webhook endpoints receiving lifecycle notifications from the CMS."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel, Field

from indexsync.events.normalizer import normalize_action
from indexsync.events.types import FILTER_EVENTS, LifecycleEvent, Record

if TYPE_CHECKING:
    from indexsync.events.bus import EventBus
    from indexsync.events.dispatcher import HookDispatcher

logger = structlog.get_logger()

router = APIRouter(prefix="/hooks", tags=["hooks"])


class FilterRequest(BaseModel):
    """Pre-persist notification body.

    Attributes:
        type: record.creating or record.updating.
        collection: Target collection.
        payload: Payload about to be persisted.
    """

    type: LifecycleEvent
    collection: str = Field(min_length=1)
    payload: Record


class FilterResponse(BaseModel):
    """Payload the CMS should persist."""

    payload: Record


class ActionRequest(BaseModel):
    """Post-persist notification body.

    Attributes:
        type: One of the record.* or batch.* action events.
        collection: Source collection.
        records: A record, a record key, or a list of either.
    """

    type: LifecycleEvent
    collection: str = Field(min_length=1)
    records: Any


class ActionAccepted(BaseModel):
    """Acknowledgement of a queued action notification.

    Attributes:
        id: Notification identifier.
        delivered_to: Number of subscribers that received it.
    """

    id: str
    delivered_to: int


@router.post("/filter", response_model=FilterResponse)
async def filter_hook(request: Request, body: FilterRequest) -> FilterResponse:
    """Apply a pre-persist notification synchronously.

    Args:
        request: FastAPI request (provides access to app state).
        body: Filter notification.

    Returns:
        Payload to persist, possibly enriched with timestamps.
    """
    if body.type not in FILTER_EVENTS:
        raise HTTPException(
            status_code=422,
            detail=f"{body.type.value} is not a filter notification",
        )

    dispatcher: HookDispatcher = request.app.state.dispatcher
    payload = await dispatcher.apply_filter(body.type, body.collection, body.payload)
    return FilterResponse(payload=payload)


@router.post(
    "/action",
    response_model=ActionAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
async def action_hook(request: Request, body: ActionRequest) -> ActionAccepted:
    """Queue a post-persist notification for indexing.

    Returns as soon as the notification is on the bus; indexing happens in
    the background subscriber and never fails this request.

    Args:
        request: FastAPI request (provides access to app state).
        body: Action notification.

    Returns:
        Notification id and delivery count.
    """
    try:
        notification = normalize_action(body.type, body.collection, body.records)
    except ValueError as e:
        raise HTTPException(
            status_code=422,
            detail=str(e),
        ) from e

    event_bus: EventBus = request.app.state.event_bus
    delivered = await event_bus.publish(notification)
    logger.debug(
        "notification_published",
        notification_id=notification.id,
        event_type=notification.type.value,
        collection=notification.collection,
        delivered_to=delivered,
    )
    return ActionAccepted(id=notification.id, delivered_to=delivered)
