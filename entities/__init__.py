"""Entity records and the bucket -> record type registry."""

from __future__ import annotations

from typing import Dict, Type

from entities.actors import City, Company, Country, Oversight, Region, State
from entities.base import ActorRecord, BucketItem, Location, Record, TrackedActorRecord
from entities.records import Asset, ConnectRequest, EthWallet, Pledge, User
from store.buckets import Bucket, bucket_name

RECORD_TYPES: Dict[Bucket, Type[BucketItem]] = {
    Bucket.COMPANY: Company,
    Bucket.CITY: City,
    Bucket.STATE: State,
    Bucket.REGION: Region,
    Bucket.COUNTRY: Country,
    Bucket.OVERSIGHT: Oversight,
    Bucket.PLEDGE: Pledge,
    Bucket.USER: User,
    Bucket.REQUEST: ConnectRequest,
    Bucket.ASSET: Asset,
}

_missing = set(Bucket) - set(RECORD_TYPES)
if _missing:
    raise RuntimeError(f"no record type registered for buckets: {sorted(b.value for b in _missing)}")


def record_type(kind: str | Bucket) -> Type[BucketItem]:
    """Return the record class stored in the bucket named `kind`."""

    return RECORD_TYPES[Bucket(bucket_name(kind))]


__all__ = [
    "ActorRecord",
    "Asset",
    "BucketItem",
    "City",
    "Company",
    "ConnectRequest",
    "Country",
    "EthWallet",
    "Location",
    "Oversight",
    "Pledge",
    "RECORD_TYPES",
    "Record",
    "Region",
    "State",
    "TrackedActorRecord",
    "User",
    "record_type",
]
