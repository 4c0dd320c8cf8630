"""
Process entry point for the relay.

Refuses to start (exit code 1, nothing bound) when the remove.bg key is not
configured; otherwise serves the FastAPI app with uvicorn.
"""

from __future__ import annotations

import logging
import os
import sys

from pydantic import ValidationError
import uvicorn

from . import config
from .api import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO))
    try:
        settings = config.get_settings()
    except ValidationError as exc:
        fields = {str(err["loc"][0]).upper() for err in exc.errors() if err["loc"]}
        if "REMOVE_BG_API_KEY" in fields:
            logger.error("Set REMOVE_BG_API_KEY in the environment or .env")
        else:
            logger.error("Invalid configuration: %s", ", ".join(sorted(fields)))
        sys.exit(1)

    logging.getLogger().setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    app = create_app(settings)
    logger.info("Proxy listening on http://localhost:%s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
