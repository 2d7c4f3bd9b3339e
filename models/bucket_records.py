from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, Integer, LargeBinary, String

from models import Base
from utils.time_utils import utcnow_sa_default


class BucketRecord(Base):
    """One stored record of the bucketed key-value store.

    Design goals:
    - One logical bucket per entity kind (`company`, `city`, ...), all in this table.
    - `(bucket, key)` is the primary key; `key` is the record's integer identity.
    - `value` is opaque to the store (the entity layer writes UTF-8 JSON).

    Keys are assigned by the identity layer, never by SQLite, so `key` has
    autoincrement disabled.
    """

    __tablename__ = "bucket_records"
    __table_args__ = (Index("ix_bucket_records_bucket", "bucket"),)

    bucket = Column(String, primary_key=True)
    key = Column(Integer, primary_key=True, autoincrement=False)

    value = Column(LargeBinary, nullable=False)

    # Auditability.
    created_at = Column(DateTime, nullable=False, default=utcnow_sa_default)
    updated_at = Column(
        DateTime, nullable=False, default=utcnow_sa_default, onupdate=utcnow_sa_default
    )
