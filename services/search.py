"""Name and parent-scoped lookups.

Both functions are linear scans over `retrieve_all`; there is no secondary
index, which is fine for the small buckets this store holds.
"""

from __future__ import annotations

from typing import List, Optional

from entities import BucketItem, record_type
from services import identity
from store.bucket_store import BucketStore
from store.buckets import Bucket
from store.errors import NotFound


def _named_type(kind: str | Bucket):
    cls = record_type(kind)
    if cls.name_field is None:
        raise ValueError(f"{cls.bucket.value} records have no name to search by")
    return cls


def search_by_name(store: BucketStore, kind: str | Bucket, name: str) -> List[BucketItem]:
    """Return every record of `kind` whose name equals `name` (case-sensitive).

    Returns an empty list when nothing matches.
    """

    cls = _named_type(kind)
    return [item for item in identity.retrieve_all(store, cls.bucket) if item.display_name() == name]


def retrieve_by_name_and_parent(
    store: BucketStore,
    kind: str | Bucket,
    name: str,
    parent_name: Optional[str] = None,
) -> BucketItem:
    """Return the first record of `kind` matching `name` and `parent_name`.

    `parent_name` is ignored for kinds without a parent (country, oversight, ...)
    and when it is None. (name, parent) pairs are assumed unique; if several
    records share one, the lowest identity wins.

    Raises:
        NotFound: if no record matches.
    """

    cls = _named_type(kind)
    check_parent = parent_name is not None and cls.parent_field is not None

    for item in identity.retrieve_all(store, cls.bucket):
        if item.display_name() != name:
            continue
        if check_parent and item.parent_name() != parent_name:
            continue
        return item

    where = f"{name!r}" + (f" in {parent_name!r}" if check_parent else "")
    raise NotFound(cls.bucket.value, name, f"no {cls.bucket.value} named {where}")
