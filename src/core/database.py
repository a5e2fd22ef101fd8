"""Database connection and session management.

This module handles the SQLite database connection using SQLAlchemy. Each
``Database`` instance owns its own engine, so several isolated stores can
live in one process.
"""

import functools
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from config import DATABASE_ECHO, DATABASE_URL
from core.exceptions import NotConnectedError, StorageUnavailableError
from models.base import Base
# Import models to ensure they are registered with Base.metadata
import models  # noqa: F401

logger = logging.getLogger(__name__)


class Database:
    """Owns one engine and hands out short-lived sessions."""

    def __init__(self, url: Optional[str] = None, echo: bool = DATABASE_ECHO):
        """Initialize Database.

        Args:
            url: SQLAlchemy database URL. Defaults to ``config.DATABASE_URL``.
            echo: Log emitted SQL.
        """
        self.url = url or DATABASE_URL
        self.echo = echo
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    def connect(self) -> Engine:
        """Create the engine if needed and the tables if absent.

        Calling this again on a connected instance re-runs the
        create-if-absent step against the existing engine.

        Raises:
            StorageUnavailableError: If the database cannot be opened.
        """
        try:
            if self.engine is None:
                logger.info("Connecting to database %s", self._safe_url())
                self._ensure_sqlite_dir()
                connect_args = {}
                if self.url.startswith("sqlite"):
                    connect_args["check_same_thread"] = False
                self.engine = create_engine(
                    self.url, echo=self.echo, connect_args=connect_args
                )
                self.SessionLocal = sessionmaker(
                    autocommit=False, autoflush=False, bind=self.engine
                )
            self.init_db()
        except (SQLAlchemyError, OSError) as e:
            self.close()
            raise StorageUnavailableError(f"Cannot initialize database: {e}") from e
        return self.engine

    def init_db(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def close(self) -> None:
        """Dispose the engine. Safe to call more than once."""
        engine, self.engine, self.SessionLocal = self.engine, None, None
        if engine is None:
            return
        try:
            engine.dispose()
            logger.info("Closed database %s", self._safe_url())
        except Exception as e:
            logger.error("Error while closing database: %s", e)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session that is rolled back on error and always closed.

        Raises:
            NotConnectedError: If ``connect()`` has not been called.
        """
        if self.SessionLocal is None:
            raise NotConnectedError()
        db = self.SessionLocal()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _ensure_sqlite_dir(self) -> None:
        url = make_url(self.url)
        if url.get_backend_name() != "sqlite":
            return
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    def _safe_url(self) -> str:
        return make_url(self.url).render_as_string(hide_password=True)


def storage_fallback(default):
    """Return ``default`` instead of raising when storage fails.

    Faults are logged with the failing operation's name. ``default`` may be a
    callable producing a fresh value (e.g. ``list``).
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (SQLAlchemyError, StorageUnavailableError) as e:
                logging.getLogger(func.__module__).error(
                    "%s failed: %s", func.__qualname__, e
                )
                return default() if callable(default) else default

        return wrapper

    return decorator
