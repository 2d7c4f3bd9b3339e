from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from logging_utils import get_logger
from models.bucket_counters import BucketCounter
from models.bucket_records import BucketRecord
from store.bucket_store import BucketStore
from store.buckets import bucket_name, check_key
from store.errors import ConcurrentIDConflict, NotFound, StoreError

logger = get_logger(__name__)


class SqlBucketStore(BucketStore):
    """Bucket store backed by the `bucket_records` table.

    Each call runs in its own short transaction, so a reader never observes a
    partially written record. SQLAlchemy failures surface as `StoreError`.
    """

    def __init__(self, engine: Engine) -> None:
        super().__init__()
        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, autoflush=False)

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("store %s failed: %s", operation, e)
            raise StoreError(f"store {operation} failed: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def put(self, bucket: str, key: int, value: bytes, *, overwrite: bool = True) -> None:
        name = bucket_name(bucket)
        check_key(key)
        with self._session("put") as session:
            if overwrite:
                session.merge(BucketRecord(bucket=name, key=key, value=bytes(value)))
                return

            session.add(BucketRecord(bucket=name, key=key, value=bytes(value)))
            try:
                session.flush()
            except IntegrityError as e:
                # Another writer (likely another process) took this key first.
                raise ConcurrentIDConflict(name, key) from e

    def get(self, bucket: str, key: int) -> bytes:
        name = bucket_name(bucket)
        check_key(key)
        with self._session("get") as session:
            row = (
                session.query(BucketRecord.value)
                .filter_by(bucket=name, key=key)
                .first()
            )
        if row is None:
            raise NotFound(name, key)
        return bytes(row[0])

    def keys(self, bucket: str) -> List[int]:
        name = bucket_name(bucket)
        with self._session("keys") as session:
            rows = (
                session.query(BucketRecord.key)
                .filter_by(bucket=name)
                .order_by(BucketRecord.key)
                .all()
            )
        return [int(r[0]) for r in rows]

    def list_values(self, bucket: str) -> List[bytes]:
        name = bucket_name(bucket)
        with self._session("list_values") as session:
            rows = (
                session.query(BucketRecord.value)
                .filter_by(bucket=name)
                .order_by(BucketRecord.key)
                .all()
            )
        return [bytes(r[0]) for r in rows]

    def high_water(self, bucket: str) -> int:
        name = bucket_name(bucket)
        with self._session("high_water") as session:
            row = session.get(BucketCounter, name)
            return int(row.high_water) if row is not None else 0

    def bump_high_water(self, bucket: str, key: int) -> None:
        name = bucket_name(bucket)
        check_key(key)
        with self._session("bump_high_water") as session:
            row = session.get(BucketCounter, name)
            if row is None:
                session.add(BucketCounter(bucket=name, high_water=key))
            elif row.high_water < key:
                row.high_water = key

    def delete(self, bucket: str, key: int) -> None:
        name = bucket_name(bucket)
        check_key(key)
        with self._session("delete") as session:
            deleted = (
                session.query(BucketRecord)
                .filter_by(bucket=name, key=key)
                .delete(synchronize_session=False)
            )
            if not deleted:
                raise NotFound(name, key)

    def close(self) -> None:
        self._engine.dispose()
