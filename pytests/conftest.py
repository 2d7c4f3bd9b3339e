from __future__ import annotations

import os
import tempfile
from typing import Generator

import pytest

# Keep per-module log files out of the working tree.
os.environ.setdefault("OPENCLIMATE_LOG_DIR", tempfile.mkdtemp(prefix="openclimate_logs_"))

from pytests.common import create_empty_sqlite_store  # noqa: E402
from store.bucket_store import BucketStore, InMemoryBucketStore  # noqa: E402


@pytest.fixture()
def memory_store() -> InMemoryBucketStore:
    return InMemoryBucketStore()


@pytest.fixture()
def sql_store(tmp_path):
    """Bucket store backed by a hermetic temp SQLite file."""

    store, engine = create_empty_sqlite_store(tmp_path / "store.sqlite")
    try:
        yield store
    finally:
        engine.dispose()


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path) -> Generator[BucketStore, None, None]:
    """Run the test once per store backend."""

    if request.param == "memory":
        yield InMemoryBucketStore()
        return

    sql, engine = create_empty_sqlite_store(tmp_path / "store.sqlite")
    try:
        yield sql
    finally:
        engine.dispose()
