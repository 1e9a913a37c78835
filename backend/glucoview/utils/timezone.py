from datetime import datetime, timezone


def ensure_utc(dt: datetime) -> datetime:
    """
    Returns ``dt`` as an aware UTC datetime.
    Assumes naive datetimes are UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def hours_between(start: datetime, end: datetime) -> float:
    """Signed hours from ``start`` to ``end`` (negative when end is earlier)."""
    return (ensure_utc(end) - ensure_utc(start)).total_seconds() / 3600.0


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
