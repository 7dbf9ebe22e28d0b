from datetime import date, datetime, time
from zoneinfo import ZoneInfo


def generate_slots(opening_hour: int = 10, closing_hour: int = 20) -> tuple[str, ...]:
    """Hourly slot labels ("HH:00") from opening through closing, inclusive."""
    if not 0 <= opening_hour <= closing_hour <= 23:
        raise ValueError("business hours must satisfy 0 <= opening <= closing <= 23")
    return tuple(f"{hour:02d}:00" for hour in range(opening_hour, closing_hour + 1))


def slot_starts_at(day: date, slot: str, tz: ZoneInfo) -> datetime:
    return datetime.combine(day, time.fromisoformat(slot), tzinfo=tz)
