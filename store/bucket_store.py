"""Bucketed key-value store contract and an in-memory implementation.

Every entity kind lives in its own bucket; records are addressed by a
non-negative integer key and stored as opaque bytes. The identity, actor and
search layers only ever talk to a store through this contract, so they can be
run against `InMemoryBucketStore` in tests and `SqlBucketStore` in production.
"""

from __future__ import annotations

import threading
from typing import Dict, List

from store.buckets import bucket_name, check_key
from store.errors import ConcurrentIDConflict, NotFound


class BucketStore:
    """Contract for how code talks to the bucketed store.

    Implementations must keep the same method names and parameters, and each
    call must be atomic per key: readers see either the old or the new bytes.
    """

    def __init__(self) -> None:
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def bucket_lock(self, bucket: str) -> threading.RLock:
        """Return the mutual-exclusion lock for `bucket`.

        The identity layer holds it while it reads the current max key and
        writes the new record, so identity assignment is atomic per bucket.
        The lock is re-entrant: callers may hold it around a check-then-save
        (e.g. the username check) and `save` takes it again.
        """
        name = bucket_name(bucket)
        with self._locks_guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = self._locks[name] = threading.RLock()
            return lock

    def high_water(self, bucket: str) -> int:
        """Highest identity ever recorded for `bucket` (0 if none)."""
        raise NotImplementedError()

    def bump_high_water(self, bucket: str, key: int) -> None:
        """Raise the recorded high-water mark of `bucket` to `key`; never lowers it."""
        raise NotImplementedError()

    def put(self, bucket: str, key: int, value: bytes, *, overwrite: bool = True) -> None:
        """Store `value` at `key`.

        With `overwrite=False` the write is create-only and raises
        `ConcurrentIDConflict` when `key` is already present.
        """
        raise NotImplementedError()

    def get(self, bucket: str, key: int) -> bytes:
        raise NotImplementedError()

    def keys(self, bucket: str) -> List[int]:
        raise NotImplementedError()

    def list_values(self, bucket: str) -> List[bytes]:
        raise NotImplementedError()

    def delete(self, bucket: str, key: int) -> None:
        raise NotImplementedError()

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class InMemoryBucketStore(BucketStore):
    """Dict-backed store; process-local, nothing persisted."""

    def __init__(self) -> None:
        super().__init__()
        self._data: Dict[str, Dict[int, bytes]] = {}
        self._high_water: Dict[str, int] = {}
        self._guard = threading.RLock()

    def high_water(self, bucket: str) -> int:
        name = bucket_name(bucket)
        with self._guard:
            return self._high_water.get(name, 0)

    def bump_high_water(self, bucket: str, key: int) -> None:
        name = bucket_name(bucket)
        check_key(key)
        with self._guard:
            if key > self._high_water.get(name, 0):
                self._high_water[name] = key

    def put(self, bucket: str, key: int, value: bytes, *, overwrite: bool = True) -> None:
        name = bucket_name(bucket)
        check_key(key)
        with self._guard:
            records = self._data.setdefault(name, {})
            if not overwrite and key in records:
                raise ConcurrentIDConflict(name, key)
            records[key] = bytes(value)

    def get(self, bucket: str, key: int) -> bytes:
        name = bucket_name(bucket)
        check_key(key)
        with self._guard:
            try:
                return self._data.get(name, {})[key]
            except KeyError:
                raise NotFound(name, key) from None

    def keys(self, bucket: str) -> List[int]:
        name = bucket_name(bucket)
        with self._guard:
            return sorted(self._data.get(name, {}))

    def list_values(self, bucket: str) -> List[bytes]:
        name = bucket_name(bucket)
        with self._guard:
            records = self._data.get(name, {})
            return [records[k] for k in sorted(records)]

    def delete(self, bucket: str, key: int) -> None:
        name = bucket_name(bucket)
        check_key(key)
        with self._guard:
            records = self._data.get(name, {})
            if key not in records:
                raise NotFound(name, key)
            del records[key]
