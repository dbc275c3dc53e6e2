"""Lifecycle hook interfaces implemented by the sync components."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

from indexsync.events.types import Record

if TYPE_CHECKING:
    from indexsync.search.schemas import SyncResult


class FilterHooks(Protocol):
    """Pre-persist hooks; the returned payload replaces the original."""

    async def record_about_to_be_created(
        self, collection: str, payload: Record
    ) -> Record: ...

    async def record_about_to_be_updated(
        self, collection: str, payload: Record
    ) -> Record: ...


class ActionHooks(Protocol):
    """Post-persist hooks; results are informational and never raise."""

    async def record_created(self, collection: str, record: Record) -> SyncResult: ...

    async def record_updated(self, collection: str, record: Record) -> SyncResult: ...

    async def record_deleted(self, collection: str, record: Any) -> SyncResult: ...

    async def batch_created(
        self, collection: str, records: Sequence[Record]
    ) -> list[SyncResult]: ...

    async def batch_updated(
        self, collection: str, records: Sequence[Record]
    ) -> list[SyncResult]: ...

    async def batch_deleted(
        self, collection: str, records: Sequence[Any]
    ) -> list[SyncResult]: ...


class LifecycleHooks(FilterHooks, ActionHooks, Protocol):
    """Every lifecycle notification the host CMS emits."""
