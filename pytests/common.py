"""Shared helpers for tests.

Intended usage:
- spin up a temporary SQLite-backed bucket store
- seed small actor hierarchies (country -> region -> state -> city)

These utilities keep tests small and consistent.
"""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from db import init_db
from entities import City, Country, Region, State
from services import identity
from store.bucket_store import BucketStore
from store.sql_store import SqlBucketStore

__all__ = [
    "make_sqlite_engine",
    "create_empty_sqlite_store",
    "seed_geography",
]

PWHASH = "a" * 128


def make_sqlite_engine(db_path: Path | str) -> Engine:
    """Create a SQLite engine suitable for tests."""

    if isinstance(db_path, Path):
        db_path = str(db_path)
    return create_engine(f"sqlite:///{db_path}", connect_args={"check_same_thread": False})


def create_empty_sqlite_store(db_path: Path) -> tuple[SqlBucketStore, Engine]:
    """Create an empty SQLite DB file with the bucket table.

    Returns (store, engine).
    """

    engine = make_sqlite_engine(db_path)
    init_db(engine)
    return SqlBucketStore(engine), engine


def seed_geography(store: BucketStore) -> dict[str, object]:
    """Save one country -> region -> state -> city chain and return it by kind."""

    country = Country(name="United States")
    identity.save(store, country)
    region = Region(name="Midwest", country="United States")
    identity.save(store, region)
    state = State(name="Illinois", region="Midwest")
    identity.save(store, state)
    city = City(name="Springfield", state="Illinois")
    identity.save(store, city)
    return {"country": country, "region": region, "state": state, "city": city}
