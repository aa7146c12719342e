"""Entry point for running the Bookmarks API."""

import uvicorn

from api.main import create_app
from core.config import get_settings
from core.logging import configure_logging

if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
