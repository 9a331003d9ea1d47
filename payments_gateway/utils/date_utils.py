"""Date manipulation utilities"""

from datetime import date, datetime, time, timezone


def ensure_utc(value: datetime) -> datetime:
    """
    Return an aware UTC datetime; naive values are taken to be UTC already.

    Raises:
        ValueError: the UTC equivalent falls outside the datetime range
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError(f"{value.isoformat()} has no UTC equivalent in range") from e


def start_of_day(day: date) -> datetime:
    """Midnight UTC at the start of the given day"""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
