"""Shared Elasticsearch client handle."""

from collections.abc import Callable
from typing import Any

import structlog
from elasticsearch import AsyncElasticsearch

from indexsync.config import Settings

logger = structlog.get_logger()


def create_client(settings: Settings) -> AsyncElasticsearch:
    """Build an Elasticsearch client from settings.

    Basic auth is only attached when both username and password are set.
    TLS options are only passed when verification is disabled.

    Args:
        settings: Service configuration.

    Returns:
        Unconnected async client; the first request opens the connection.
    """
    options: dict[str, Any] = {
        "hosts": [settings.elasticsearch_node],
        "request_timeout": settings.elasticsearch_request_timeout,
    }

    if settings.has_credentials:
        options["basic_auth"] = (
            settings.elasticsearch_username,
            settings.elasticsearch_password,
        )

    if not settings.elasticsearch_verify_ssl:
        options["verify_certs"] = False
        options["ssl_show_warn"] = False

    return AsyncElasticsearch(**options)


class ClientHandle:
    """Construct-once holder for the process-wide search client.

    The client is built on first access and reused afterwards. Building
    never awaits, so concurrent first callers on one event loop always get
    the same instance.
    """

    def __init__(
        self,
        settings: Settings,
        factory: Callable[[Settings], AsyncElasticsearch] = create_client,
    ) -> None:
        """Initialize handle without connecting.

        Args:
            settings: Service configuration passed to the factory.
            factory: Callable building the client.
        """
        self._settings = settings
        self._factory = factory
        self._client: AsyncElasticsearch | None = None

    @property
    def is_open(self) -> bool:
        """Whether the client has been constructed."""
        return self._client is not None

    def get(self) -> AsyncElasticsearch:
        """Return the shared client, constructing it on first use."""
        if self._client is None:
            self._client = self._factory(self._settings)
            logger.debug(
                "elasticsearch_client_created",
                node=self._settings.elasticsearch_node,
                authenticated=self._settings.has_credentials,
                verify_ssl=self._settings.elasticsearch_verify_ssl,
            )
        return self._client

    async def close(self) -> None:
        """Close the client if it was ever constructed."""
        if self._client is None:
            return
        client, self._client = self._client, None
        await client.close()
        logger.info("elasticsearch_client_closed")
