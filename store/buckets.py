from __future__ import annotations

import enum


class Bucket(str, enum.Enum):
    """Fixed set of bucket names, one per entity kind."""

    COMPANY = "company"
    CITY = "city"
    STATE = "state"
    REGION = "region"
    COUNTRY = "country"
    OVERSIGHT = "oversight"
    PLEDGE = "pledge"
    USER = "user"
    REQUEST = "request"
    ASSET = "asset"


def bucket_name(bucket: str | Bucket) -> str:
    """Normalize `bucket` to its string name.

    Raises:
        ValueError: if `bucket` is not one of the fixed bucket names.
    """

    try:
        return Bucket(bucket).value
    except ValueError:
        raise ValueError(f"unknown bucket: {bucket!r}") from None


def check_key(key: int) -> int:
    """Return `key` if it is a valid (non-negative integer) store key."""

    if isinstance(key, bool) or not isinstance(key, int):
        raise ValueError(f"store keys must be integers, got {type(key).__name__}")
    if key < 0:
        raise ValueError(f"store keys must be non-negative, got {key}")
    return key
