"""Bucketed key-value store: contract, backends and error taxonomy."""

from store.bucket_store import BucketStore, InMemoryBucketStore
from store.buckets import Bucket
from store.errors import (
    ConcurrentIDConflict,
    DeserializationError,
    DispatchError,
    NotFound,
    StoreError,
    UnknownActorKind,
)

__all__ = [
    "Bucket",
    "BucketStore",
    "ConcurrentIDConflict",
    "DeserializationError",
    "DispatchError",
    "InMemoryBucketStore",
    "NotFound",
    "StoreError",
    "UnknownActorKind",
]
