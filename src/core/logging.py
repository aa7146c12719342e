"""Process-wide logging setup."""
import logging

from core.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure the root logger once at process start."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
