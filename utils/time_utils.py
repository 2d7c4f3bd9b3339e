"""Time helpers.

Keep all timestamps consistent and timezone-aware.
Python 3.13 deprecates naive UTC helpers like datetime.utcnow(); use this module instead.
"""

from __future__ import annotations

from datetime import datetime, timezone

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utcnow() -> datetime:
    """Return the current time as a timezone-aware datetime in UTC (+00:00)."""

    return datetime.now(timezone.utc)


def utcnow_sa_default() -> datetime:
    """SQLAlchemy-friendly default callable for UTC timestamps.

    Prefer this over passing `utcnow` directly if you want the intent to be explicit.
    """

    return utcnow()


def timestamp() -> str:
    """Return the current UTC time as a `YYYY-MM-DDTHH:MM:SSZ` string.

    This is the format stored in `last_updated` on actor records.
    """

    return utcnow().strftime(TIMESTAMP_FORMAT)
