# fintrack/core/logging_config.py
import logging

from fintrack.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = None) -> None:
    """Configure root logging once for the API process."""
    logging.basicConfig(level=level or settings.LOG_LEVEL, format=LOG_FORMAT)
