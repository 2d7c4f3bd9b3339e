"""Error taxonomy for the bucket store and the layers built on it."""

from __future__ import annotations


class StoreError(Exception):
    """Underlying put/get/delete failure (I/O, database error)."""


class NotFound(StoreError, LookupError):
    """A key or a named record is absent."""

    def __init__(self, bucket: str, key: object, message: str | None = None) -> None:
        self.bucket = bucket
        self.key = key
        super().__init__(message or f"{bucket}:{key} not found")


class DeserializationError(StoreError, ValueError):
    """Stored bytes do not match the expected record shape."""


class ConcurrentIDConflict(StoreError):
    """A create-only write found the key already taken."""

    def __init__(self, bucket: str, key: int) -> None:
        self.bucket = bucket
        self.key = key
        super().__init__(f"identity {bucket}:{key} was claimed by another writer")


class DispatchError(Exception):
    """Actor dispatch failed before reaching the store."""


class UnknownActorKind(DispatchError, ValueError):
    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"actor type {kind!r} is not valid")
