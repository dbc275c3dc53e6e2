"""Tests for pre-persist timestamp enrichment."""

from datetime import UTC, datetime

import pytest

from indexsync.collections import AllowList
from indexsync.enrichment import TimestampEnricher

pytestmark = pytest.mark.asyncio

NOW = datetime(2024, 5, 1, 9, 30, tzinfo=UTC)


@pytest.fixture
def enricher() -> TimestampEnricher:
    return TimestampEnricher(clock=lambda: NOW)


async def test_create_stamps_created_at(enricher):
    payload = await enricher.record_about_to_be_created("articles", {"title": "A"})

    assert payload == {"title": "A", "created_at": "2024-05-01T09:30:00+00:00"}


async def test_create_keeps_existing_created_at(enricher):
    payload = await enricher.record_about_to_be_created(
        "articles", {"title": "A", "created_at": "2020-01-01T00:00:00Z"}
    )

    assert payload["created_at"] == "2020-01-01T00:00:00Z"


async def test_update_always_overwrites_updated_at(enricher):
    payload = await enricher.record_about_to_be_updated(
        "articles", {"title": "B", "updated_at": "2020-01-01T00:00:00Z"}
    )

    assert payload["updated_at"] == "2024-05-01T09:30:00+00:00"


async def test_input_payload_is_not_mutated(enricher):
    original = {"title": "A"}

    await enricher.record_about_to_be_created("articles", original)

    assert original == {"title": "A"}


async def test_disallowed_collection_passes_through():
    enricher = TimestampEnricher(AllowList({"articles"}), clock=lambda: NOW)
    original = {"title": "A"}

    payload = await enricher.record_about_to_be_updated("pages", original)

    assert payload is original
    assert "updated_at" not in payload


async def test_default_clock_is_utc():
    payload = await TimestampEnricher().record_about_to_be_created("articles", {})

    assert datetime.fromisoformat(payload["created_at"]).tzinfo is not None
