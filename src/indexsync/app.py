"""FastAPI application factory and lifespan management."""

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from indexsync.config import Settings
from indexsync.events import EventBus, HookDispatcher
from indexsync.extension import IndexSyncExtension
from indexsync.middleware.auth import APIKeyMiddleware
from indexsync.middleware.logging import RequestLoggingMiddleware
from indexsync.routes import health, hooks, search
from indexsync.search import ClientHandle, run_index_subscriber

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle events.

    Wires the search index, synchronizer, enricher and event bus, probes
    the search engine once, and starts the index subscriber. A failed probe
    is logged and startup continues. Closes the client on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    handle: ClientHandle = app.state.client_handle
    logger.info("api_startup", host=settings.host, port=settings.port)

    extension = IndexSyncExtension.from_settings(settings, handle)
    dispatcher = HookDispatcher(actions=extension, filters=extension)
    event_bus = EventBus(
        queue_size=settings.event_queue_size,
        max_subscribers=settings.event_max_subscribers,
    )

    app.state.extension = extension
    app.state.search_index = extension.search_index
    app.state.dispatcher = dispatcher
    app.state.event_bus = event_bus

    await extension.start()

    started = asyncio.Event()
    subscriber_task = asyncio.create_task(
        run_index_subscriber(event_bus, dispatcher, started)
    )
    await started.wait()
    logger.info("hooks_registered", node=settings.elasticsearch_node)

    try:
        yield
    finally:
        subscriber_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await subscriber_task

        await handle.close()
        logger.info("api_shutdown")


def create_app(
    settings: Settings | None = None,
    client_handle: ClientHandle | None = None,
) -> FastAPI:
    """Factory function to create configured FastAPI application.

    Args:
        settings: Configuration instance. Creates default if None.
        client_handle: Shared search client handle. Built from settings
            if None.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings()
    if client_handle is None:
        client_handle = ClientHandle(settings)

    app = FastAPI(
        title="CMS Search Index Sync",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/api/v1/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/api/v1/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.client_handle = client_handle

    app.add_middleware(RequestLoggingMiddleware)
    if settings.key:
        app.add_middleware(APIKeyMiddleware, api_key=settings.key)

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(hooks.router, prefix="/api/v1")
    app.include_router(search.router, prefix="/api/v1")

    return app
