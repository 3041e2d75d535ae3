"""Timestamp helpers"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def to_iso_z(dt: datetime) -> str:
    """
    Format a datetime as ISO-8601 with a trailing "Z".

    Args:
        dt: datetime (naive values are treated as UTC)

    Returns:
        str: "2025-10-14T01:30:00.123456Z" style string
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


def utc_now_iso() -> str:
    return to_iso_z(utc_now())
