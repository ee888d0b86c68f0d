"""
DateTime utility functions - quote timestamps are Korean Standard Time.
"""
from datetime import datetime, timezone, timedelta
from typing import Optional

# KST timezone (UTC+9, no daylight saving)
KST = timezone(timedelta(hours=9))


def to_kst(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is in KST.
    Naive datetimes are taken to be UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(KST)


def now_kst() -> datetime:
    """Current KST datetime (timezone-aware)."""
    return datetime.now(KST)


def format_korean_locale(dt: Optional[datetime] = None) -> str:
    """
    Render a datetime the way the ko-KR locale does, in KST.

    Example: 2024-05-01 15:04:05+09:00 -> "2024. 5. 1. 오후 3:04:05"
    """
    kst = to_kst(dt) if dt is not None else now_kst()
    meridiem = "오전" if kst.hour < 12 else "오후"
    hour = kst.hour % 12 or 12
    return f"{kst.year}. {kst.month}. {kst.day}. {meridiem} {hour}:{kst.minute:02d}:{kst.second:02d}"
