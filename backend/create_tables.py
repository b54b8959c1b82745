# create_tables.py — run once to create missing tables (development helper)
import logging, sys

from fintrack.core.logging_config import setup_logging
from fintrack.db.session import DATABASE_URL, init_db

setup_logging()
logger = logging.getLogger(__name__)

logger.info("Creating tables in %s (if not exist)...", DATABASE_URL.split("@")[-1])
try:
    init_db()
    logger.info("Done.")
except Exception:
    logger.exception("Error creating tables:")
    sys.exit(1)
