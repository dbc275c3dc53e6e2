"""Service configuration loaded from environment variables."""
from pydantic import AliasChoices, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service configuration loaded from environment variables.

    Elasticsearch and collection settings keep the unprefixed variable names
    used by the CMS deployment; service settings use the INDEXSYNC_ prefix.

    Attributes:
        elasticsearch_node: Search engine endpoint URL.
        elasticsearch_username: Basic-auth username.
        elasticsearch_password: Basic-auth password.
        elasticsearch_index: Name of the index holding all documents.
        elasticsearch_verify_ssl: Verify TLS certificates of the endpoint.
        elasticsearch_request_timeout: Per-request timeout in seconds.
        indexed_collections_raw: Comma-separated collection allow-list.
        primary_key_field: Record field holding the record identifier.
        host: Bind address for the API server.
        port: Port number for the API server.
        debug: Enable debug logging and API documentation.
        key: API key for authenticating hook requests.
        event_queue_size: Maximum size of each subscriber queue.
        event_max_subscribers: Maximum number of concurrent subscribers.
    """

    model_config = SettingsConfigDict(
        env_prefix="INDEXSYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    elasticsearch_node: str = Field(
        default="http://localhost:9200",
        validation_alias=AliasChoices("ELASTICSEARCH_NODE", "elasticsearch_node"),
    )
    elasticsearch_username: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ELASTICSEARCH_USERNAME", "elasticsearch_username"),
    )
    elasticsearch_password: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ELASTICSEARCH_PASSWORD", "elasticsearch_password"),
    )
    elasticsearch_index: str = Field(
        default="directus_items",
        validation_alias=AliasChoices("ELASTICSEARCH_INDEX", "elasticsearch_index"),
    )
    elasticsearch_verify_ssl: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "ELASTICSEARCH_VERIFY_SSL", "elasticsearch_verify_ssl"
        ),
    )
    elasticsearch_request_timeout: float = Field(
        default=30.0,
        validation_alias=AliasChoices(
            "ELASTICSEARCH_REQUEST_TIMEOUT", "elasticsearch_request_timeout"
        ),
    )
    indexed_collections_raw: str = Field(
        default="",
        validation_alias=AliasChoices("INDEXED_COLLECTIONS", "indexed_collections_raw"),
    )

    primary_key_field: str = "id"

    host: str = "127.0.0.1"
    port: int = 8055
    debug: bool = False
    key: str = ""

    event_queue_size: int = 100
    event_max_subscribers: int = 100

    @computed_field
    @property
    def indexed_collections(self) -> frozenset[str]:
        """Parse the collection allow-list from comma-separated string.

        Returns:
            Allowed collection names. Empty means every collection.
        """
        return frozenset(
            name.strip()
            for name in self.indexed_collections_raw.split(",")
            if name.strip()
        )

    @property
    def has_credentials(self) -> bool:
        """Whether both basic-auth username and password are configured."""
        return bool(self.elasticsearch_username and self.elasticsearch_password)
