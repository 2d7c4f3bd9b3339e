from __future__ import annotations

from sqlalchemy import inspect, text

import db as db_module
from entities import Company, User
from services import identity
from store.sql_store import SqlBucketStore


def test_open_store_creates_directory_and_schema(tmp_path):
    db_path = tmp_path / "nested" / "openclimate.db"

    store = db_module.open_store(db_path)
    try:
        assert isinstance(store, SqlBucketStore)
        assert db_path.parent.is_dir()
        tables = inspect(store.engine).get_table_names()
        assert {"bucket_records", "bucket_counters"} <= set(tables)
    finally:
        store.close()


def test_open_store_applies_sqlite_pragmas(tmp_path):
    store = db_module.open_store(tmp_path / "pragmas.db")
    try:
        with store.engine.connect() as conn:
            busy = conn.execute(text("PRAGMA busy_timeout")).scalar()
            mode = conn.execute(text("PRAGMA journal_mode")).scalar()
        assert busy == db_module.Config.SQLITE_BUSY_TIMEOUT_MS
        assert mode == ("wal" if db_module.Config.SQLITE_WAL else "delete")
    finally:
        store.close()


def test_store_survives_close_and_reopen(tmp_path):
    db_path = tmp_path / "lifecycle.db"

    with db_module.open_store(db_path) as store:
        identity.save(store, Company(name="Acme", country="Germany"))

    with db_module.open_store(db_path) as store:
        loaded = identity.retrieve_by_id(store, "company", 1)
        assert loaded.name == "Acme"
        assert identity.save(store, Company(name="Globex")) == 2


def test_deleted_id_stays_retired_after_reopen(tmp_path):
    db_path = tmp_path / "retired.db"

    with db_module.open_store(db_path) as store:
        identity.save(store, User(username="first"))
        identity.save(store, User(username="second"))
        identity.delete(store, "user", 2)

    with db_module.open_store(db_path) as store:
        assert identity.save(store, User(username="third")) == 3
