"""Entry point for the API server."""

import contextlib
import sys

import structlog
import uvicorn

from conferences.app import create_app
from conferences.config import Settings
from conferences.logging import configure_logging

logger = structlog.get_logger()


def main() -> None:
    """Entry point for python -m conferences."""
    settings = Settings()
    configure_logging(debug=settings.debug, json_logs=not settings.debug)

    app = create_app(settings)
    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level="warning",
        access_log=False,
    )
    server = uvicorn.Server(config)

    logger.info("server_starting", host=settings.host, port=settings.port)
    with contextlib.suppress(KeyboardInterrupt):
        server.run()

    sys.exit(0)


if __name__ == "__main__":
    main()
