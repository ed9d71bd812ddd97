from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    """Timezone-aware current time used for created/joined timestamps."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Canonical SQLAlchemy base for the tournament platform schema."""

    pass


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Aware UTC datetime; naive values are taken to be UTC already.

    SQLite returns DateTime(timezone=True) columns as naive UTC, while request
    bodies may carry offsets, so both sides go through here before comparing.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
