"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from typing import Any

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig
from elasticsearch import BadRequestError, NotFoundError
from fastapi.testclient import TestClient

from indexsync.app import create_app
from indexsync.config import Settings
from indexsync.search import ClientHandle, SearchIndex


def api_meta(status: int) -> ApiResponseMeta:
    return ApiResponseMeta(
        status=status,
        http_version="1.1",
        headers=HttpHeaders(),
        duration=0.0,
        node=NodeConfig("http", "localhost", 9200),
    )


class FakeIndices:
    """Indices namespace of the fake client."""

    def __init__(self, es: "FakeElasticsearch") -> None:
        self._es = es

    async def exists(self, index: str) -> bool:
        self._es.calls.append(("indices.exists", index))
        self._es.raise_if_down()
        return index in self._es.created_indices and not self._es.hide_index

    async def create(
        self,
        index: str,
        settings: dict[str, Any] | None = None,
        mappings: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        self._es.calls.append(("indices.create", index))
        self._es.raise_if_down()
        if self._es.create_error is not None:
            raise self._es.create_error
        if index in self._es.created_indices:
            raise BadRequestError(
                message="resource_already_exists_exception",
                meta=api_meta(400),
                body={"error": {"type": "resource_already_exists_exception"}},
            )
        self._es.created_indices[index] = {"settings": settings, "mappings": mappings}
        return {"acknowledged": True, "index": index}


class FakeElasticsearch:
    """In-memory stand-in for AsyncElasticsearch.

    Stores documents per (index, id) and raises the same exception types as
    the real client.
    """

    def __init__(self) -> None:
        self.documents: dict[tuple[str, str], dict[str, Any]] = {}
        self.created_indices: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, str]] = []
        self.indices = FakeIndices(self)
        self.error: Exception | None = None
        self.create_error: Exception | None = None
        self.hide_index = False
        self.closed = False

    def raise_if_down(self) -> None:
        if self.error is not None:
            raise self.error

    def writes(self) -> list[tuple[str, str]]:
        return [c for c in self.calls if c[0] in ("index", "delete")]

    async def index(
        self, index: str, id: str, document: dict[str, Any]
    ) -> dict[str, Any]:
        self.calls.append(("index", id))
        self.raise_if_down()
        self.documents[(index, id)] = dict(document)
        return {"_id": id, "result": "created"}

    async def delete(self, index: str, id: str) -> dict[str, Any]:
        self.calls.append(("delete", id))
        self.raise_if_down()
        if (index, id) not in self.documents:
            raise NotFoundError(
                message="not_found",
                meta=api_meta(404),
                body={"_id": id, "result": "not_found"},
            )
        del self.documents[(index, id)]
        return {"_id": id, "result": "deleted"}

    async def info(self) -> dict[str, Any]:
        self.calls.append(("info", ""))
        self.raise_if_down()
        return {"version": {"number": "8.13.4"}}

    async def search(
        self,
        index: str,
        query: dict[str, Any],
        from_: int = 0,
        size: int = 10,
    ) -> dict[str, Any]:
        self.calls.append(("search", index))
        self.raise_if_down()
        if index not in self.created_indices:
            raise NotFoundError(
                message="index_not_found_exception",
                meta=api_meta(404),
                body={"error": {"type": "index_not_found_exception"}},
            )

        wanted = None
        for clause in query["bool"]["filter"]:
            wanted = clause["term"]["collection"]

        hits = [
            {"_id": doc_id, "_score": 1.0, "_source": doc}
            for (idx, doc_id), doc in sorted(self.documents.items())
            if idx == index and (wanted is None or doc["collection"] == wanted)
        ]
        return {
            "hits": {
                "total": {"value": len(hits), "relation": "eq"},
                "hits": hits[from_ : from_ + size],
            }
        }

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_es() -> FakeElasticsearch:
    """Fresh in-memory search engine."""
    return FakeElasticsearch()


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        host="127.0.0.1",
        port=8055,
        debug=True,
        elasticsearch_node="http://localhost:9200",
        elasticsearch_index="test_items",
        indexed_collections_raw="",
    )


@pytest.fixture
def handle(settings: Settings, fake_es: FakeElasticsearch) -> ClientHandle:
    """Client handle that always yields the fake engine."""
    return ClientHandle(settings, factory=lambda _: fake_es)


@pytest.fixture
def search_index(handle: ClientHandle, settings: Settings) -> SearchIndex:
    """Search index bound to the fake engine."""
    return SearchIndex(handle, settings.elasticsearch_index)


@pytest.fixture
def client(settings: Settings, handle: ClientHandle) -> TestClient:
    """Create test client with configured app (lifespan not started)."""
    app = create_app(settings, client_handle=handle)
    return TestClient(app)
