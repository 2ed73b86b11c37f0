"""
Date helpers. Every timestamp is persisted as naive UTC.

- A naive datetime is assumed to already be UTC.
- An aware datetime is converted to UTC and stripped of tzinfo.
- API responses put the UTC offset back with ``as_utc``.
"""
from datetime import date, datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(dt: Optional[datetime]) -> Optional[datetime]:
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def as_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Aware UTC datetime; naive values are taken as UTC"""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_day_start(day: Optional[date] = None) -> datetime:
    """Midnight (naive UTC) of ``day``, today by default"""
    day = day or utcnow().date()
    return datetime(day.year, day.month, day.day)


def format_date_fr(value) -> str:
    """dd/mm/yyyy, the format printed on labels and reports"""
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = to_utc_naive(value)
    return value.strftime("%d/%m/%Y")


def format_datetime_fr(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return to_utc_naive(value).strftime("%d/%m/%Y %H:%M")
