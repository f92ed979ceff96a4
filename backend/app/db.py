from __future__ import annotations

import logging
import sqlite3
from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.config import settings

logger = logging.getLogger(__name__)

SQLITE_PRAGMAS = (
    "PRAGMA busy_timeout=30000;",
    "PRAGMA foreign_keys=ON;",
)
# Rejected while another connection holds a write lock; the assessment API still works without them.
SQLITE_JOURNAL_PRAGMAS = (
    "PRAGMA journal_mode=WAL;",
    "PRAGMA synchronous=NORMAL;",
)

database_url = settings.sqlalchemy_url()
is_sqlite = database_url.startswith("sqlite")
engine = create_engine(
    database_url,
    future=True,
    connect_args={"check_same_thread": False, "timeout": 30} if is_sqlite else {},
)


def _on_sqlite_connect(dbapi_connection, _connection_record) -> None:
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return

    cursor = dbapi_connection.cursor()
    try:
        for pragma in SQLITE_PRAGMAS:
            cursor.execute(pragma)
        try:
            for pragma in SQLITE_JOURNAL_PRAGMAS:
                cursor.execute(pragma)
        except sqlite3.OperationalError as exc:
            logger.warning("Keeping default SQLite journal mode: %s", exc)
    finally:
        cursor.close()


if is_sqlite:
    event.listen(engine, "connect", _on_sqlite_connect)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create missing tables, then bring older SQLite files up to the current columns."""
    from app import models  # noqa: F401
    from app.db_migrations import run_db_migrations

    Base.metadata.create_all(bind=engine)
    run_db_migrations(engine)
