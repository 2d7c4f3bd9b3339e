from __future__ import annotations

import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from config import Config


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    """Configure SQLite for better concurrent read/write behavior."""
    cursor = dbapi_connection.cursor()
    # Wait for locks instead of failing immediately.
    cursor.execute(f"PRAGMA busy_timeout={int(Config.SQLITE_BUSY_TIMEOUT_MS)}")
    if Config.SQLITE_WAL:
        # Better concurrency (readers not blocked by writers).
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


DB_PATH = Config.DB_PATH

Base = declarative_base()


def make_engine(db_path: str | os.PathLike[str] | None = None) -> Engine:
    """Create a SQLite engine for the bucket store at `db_path`.

    Defaults to `Config.DB_PATH`. The parent directory is created if missing.
    """

    path = os.fspath(db_path) if db_path is not None else DB_PATH
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)

    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False, "timeout": 30},
        pool_pre_ping=True,
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


def init_db(engine: Engine) -> None:
    """Create the bucket table if it does not exist yet."""

    # Register models with Base.metadata before create_all.
    import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def open_store(db_path: str | os.PathLike[str] | None = None):
    """Open the process-wide bucket store.

    Call once on startup and pass the returned store explicitly to the
    identity, actor and search services. Call `store.close()` on shutdown.
    """

    from store.sql_store import SqlBucketStore

    engine = make_engine(db_path)
    init_db(engine)
    return SqlBucketStore(engine)
