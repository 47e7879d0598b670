#!/usr/bin/env python3
"""
Server Entry Point - Main Layer

Runs the relay API with uvicorn using the server settings.
"""

import uvicorn

from cdnrelay.main.config import get_settings
from cdnrelay.shared import get_logger

logger = get_logger(__name__)


def main() -> None:
    """Start uvicorn serving ``cdnrelay.main.app:app``."""
    settings = get_settings()
    logger.info(
        "server.starting",
        host=settings.server.host,
        port=settings.server.port,
        origins=[origin.name for origin in settings.monitor.origins],
    )
    uvicorn.run(
        "cdnrelay.main.app:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
