"""Main entry point for the Review Hub data store.

Opens the configured database, creating its tables on first run, and reports
whether an initial admin account still has to be set up.
"""

import logging
from typing import Optional

from config import DATABASE_URL
from core.data_store import DataStore
from core.exceptions import StorageUnavailableError
from core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main(url: Optional[str] = None) -> int:
    """Initialize the database.

    Args:
        url: Database URL; defaults to ``config.DATABASE_URL``.

    Returns:
        Process exit code.
    """
    setup_logging()
    store = DataStore(url or DATABASE_URL)
    try:
        store.connect()
    except StorageUnavailableError as e:
        logger.error("Database initialization failed: %s", e)
        return 1

    try:
        if store.is_empty():
            logger.info("No users yet; the first account to register becomes the admin")
        else:
            admin = store.users.get_first_admin()
            logger.info("Database ready (admin: %s)", admin or "none")
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
