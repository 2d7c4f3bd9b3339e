"""Identity assignment and persistence for every entity kind.

A record with `id == 0` gets one more than the bucket's highest identity (1
for an empty bucket) on first save. "Highest" covers both the stored keys and
the bucket's persisted high-water mark, so an identity freed by a delete is
never handed out again. The read-max-then-write sequence runs under the
store's per-bucket lock and the write itself is create-only, so two writers
can never end up sharing an identity: an in-process race is serialized by the
lock and a cross-process one surfaces as `ConcurrentIDConflict`.
"""

from __future__ import annotations

from typing import List, Type, TypeVar

from entities import BucketItem, record_type
from logging_utils import get_logger
from store.bucket_store import BucketStore
from store.buckets import Bucket, check_key
from store.errors import StoreError

logger = get_logger(__name__)

T = TypeVar("T", bound=BucketItem)


def save(store: BucketStore, item: BucketItem) -> int:
    """Persist `item`, assigning its identity on first save.

    Records that track `last_updated` get a fresh timestamp before every save;
    if the write fails the timestamp (and a freshly assigned id) is rolled back.
    An existing identity is a full overwrite in place.

    Returns:
        The record's identity.

    Raises:
        ValueError: if `item.id` is not a non-negative integer.
        ConcurrentIDConflict: if another writer claimed the computed identity.
        StoreError: on any underlying store failure.
    """

    check_key(item.id)
    bucket = item.bucket.value
    touched = item.touch()

    if item.id != 0:
        try:
            store.put(bucket, item.id, item.to_bytes())
            store.bump_high_water(bucket, item.id)
        except StoreError:
            item.restore(touched)
            raise
        logger.debug("saved %s:%d", bucket, item.id)
        return item.id

    with store.bucket_lock(bucket):
        next_id = max(max(store.keys(bucket), default=0), store.high_water(bucket)) + 1
        item.set_id(next_id)
        try:
            store.put(bucket, next_id, item.to_bytes(), overwrite=False)
            store.bump_high_water(bucket, next_id)
        except StoreError:
            item.set_id(0)
            item.restore(touched)
            raise

    logger.info("assigned identity %s:%d", bucket, next_id)
    return next_id


def retrieve_by_id(store: BucketStore, kind: str | Bucket, record_id: int) -> BucketItem:
    """Load the record with identity `record_id` from bucket `kind`.

    Raises:
        NotFound: if the key is absent.
        DeserializationError: if the stored bytes do not decode to the kind.
    """

    cls = record_type(kind)
    return cls.from_bytes(store.get(cls.bucket.value, record_id))


def retrieve_all(store: BucketStore, kind: str | Bucket) -> List[BucketItem]:
    """Load every record of bucket `kind`, ordered by identity.

    A single malformed record aborts the whole scan with `DeserializationError`.
    """

    cls = record_type(kind)
    return [cls.from_bytes(raw) for raw in store.list_values(cls.bucket.value)]


def retrieve_as(store: BucketStore, cls: Type[T], record_id: int) -> T:
    """Typed variant of `retrieve_by_id` for callers holding the record class."""

    return cls.from_bytes(store.get(cls.bucket.value, record_id))


def delete(store: BucketStore, kind: str | Bucket, record_id: int) -> None:
    """Delete a record by identity. Dependents (e.g. pledges) are left alone.

    The identity is not handed out again: the bucket's high-water mark is
    raised to it before the record goes.
    """

    cls = record_type(kind)
    with store.bucket_lock(cls.bucket.value):
        store.get(cls.bucket.value, record_id)
        store.bump_high_water(cls.bucket.value, record_id)
        store.delete(cls.bucket.value, record_id)
    logger.info("deleted %s:%d", cls.bucket.value, record_id)
