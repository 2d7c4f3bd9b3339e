from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String

from models import Base
from utils.time_utils import utcnow_sa_default


class BucketCounter(Base):
    """Highest identity ever handed out per bucket.

    Outlives deletes in `bucket_records`, so a deleted identity is never
    assigned again.
    """

    __tablename__ = "bucket_counters"

    bucket = Column(String, primary_key=True)
    high_water = Column(Integer, nullable=False, default=0)

    updated_at = Column(
        DateTime, nullable=False, default=utcnow_sa_default, onupdate=utcnow_sa_default
    )
