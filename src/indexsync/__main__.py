"""Entry point for the index sync service."""

import contextlib
import sys

import structlog
import uvicorn

from indexsync.app import create_app
from indexsync.config import Settings
from indexsync.logging import configure_logging

logger = structlog.get_logger()


def main() -> None:
    """Entry point for python -m indexsync."""
    settings = Settings()
    configure_logging(debug=settings.debug)

    app = create_app(settings)
    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level="warning",
        access_log=False,
    )

    with contextlib.suppress(KeyboardInterrupt):
        uvicorn.Server(config).run()

    logger.info("server_exited")
    sys.exit(0)


if __name__ == "__main__":
    main()
