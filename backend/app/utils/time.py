from datetime import datetime
from zoneinfo import ZoneInfo


def local_now(tz: ZoneInfo) -> datetime:
    return datetime.now(tz)


def to_local(dt: datetime, tz: ZoneInfo) -> datetime:
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return dt.astimezone(tz)
