from datetime import date, datetime, timezone
from typing import Optional, Union

DateLike = Union[date, datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_date(now: Optional[DateLike] = None) -> date:
    """Reference date for derived fields: today (UTC) unless one is given"""
    if now is None:
        return utcnow().date()
    if isinstance(now, datetime):
        return now.date()
    return now
