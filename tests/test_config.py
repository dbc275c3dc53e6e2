"""Tests for settings, allow-list and client handle."""

import pytest
from elasticsearch import AsyncElasticsearch

from indexsync.collections import AllowList
from indexsync.config import Settings
from indexsync.search import ClientHandle, create_client


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in (
            "ELASTICSEARCH_NODE",
            "ELASTICSEARCH_USERNAME",
            "ELASTICSEARCH_PASSWORD",
            "ELASTICSEARCH_INDEX",
            "ELASTICSEARCH_VERIFY_SSL",
            "INDEXED_COLLECTIONS",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.elasticsearch_node == "http://localhost:9200"
        assert settings.elasticsearch_index == "directus_items"
        assert settings.elasticsearch_verify_ssl is True
        assert settings.elasticsearch_request_timeout == 30.0
        assert settings.indexed_collections == frozenset()
        assert settings.primary_key_field == "id"
        assert not settings.has_credentials

    def test_reads_cms_environment_names(self, monkeypatch):
        monkeypatch.setenv("ELASTICSEARCH_NODE", "https://search:9200")
        monkeypatch.setenv("ELASTICSEARCH_INDEX", "cms")
        monkeypatch.setenv("ELASTICSEARCH_VERIFY_SSL", "false")
        monkeypatch.setenv("INDEXED_COLLECTIONS", "articles, pages,,")
        monkeypatch.setenv("INDEXSYNC_PRIMARY_KEY_FIELD", "uuid")

        settings = Settings(_env_file=None)

        assert settings.elasticsearch_node == "https://search:9200"
        assert settings.elasticsearch_index == "cms"
        assert settings.elasticsearch_verify_ssl is False
        assert settings.indexed_collections == frozenset({"articles", "pages"})
        assert settings.primary_key_field == "uuid"

    def test_credentials_require_both_parts(self):
        assert not Settings(_env_file=None, elasticsearch_username="elastic").has_credentials
        assert Settings(
            _env_file=None,
            elasticsearch_username="elastic",
            elasticsearch_password="changeme",
        ).has_credentials


class TestAllowList:
    def test_empty_allows_all(self):
        allow_list = AllowList()
        assert "anything" in allow_list
        assert allow_list.describe() == "all"

    def test_membership(self):
        allow_list = AllowList(["pages", "articles"])
        assert "articles" in allow_list
        assert "users" not in allow_list
        assert allow_list.describe() == "articles, pages"


class TestClientHandle:
    def test_constructs_once(self, settings):
        built = []

        def factory(s):
            built.append(s)
            return object()

        handle = ClientHandle(settings, factory=factory)

        assert not handle.is_open
        first = handle.get()
        assert handle.get() is first
        assert len(built) == 1
        assert handle.is_open

    @pytest.mark.asyncio
    async def test_close_resets_handle(self, handle, fake_es):
        handle.get()

        await handle.close()

        assert fake_es.closed
        assert not handle.is_open

    @pytest.mark.asyncio
    async def test_close_without_client_is_noop(self, settings):
        await ClientHandle(settings).close()

    @pytest.mark.asyncio
    async def test_create_client_with_auth_and_no_verification(self):
        settings = Settings(
            _env_file=None,
            elasticsearch_node="https://search.example.com:9200",
            elasticsearch_username="elastic",
            elasticsearch_password="changeme",
            elasticsearch_verify_ssl=False,
        )

        client = create_client(settings)
        try:
            assert isinstance(client, AsyncElasticsearch)
        finally:
            await client.close()
