import re
from dataclasses import dataclass, fields, replace
from datetime import date, datetime
from typing import Any, Collection, Iterable, Optional, Sequence
from zoneinfo import ZoneInfo

from ..utils.time import to_local
from .calendar import slot_starts_at
from .errors import MalformedInputError, ValidationFailedError

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class BookingDraft:
    date: Optional[str] = None
    time: Optional[str] = None
    guests: Any = None
    name: Optional[str] = None
    contact: Optional[str] = None

    def merged(self, patch: "BookingDraft") -> "BookingDraft":
        """Overlay the non-null fields of `patch` onto this draft."""
        changes = {f.name: getattr(patch, f.name) for f in fields(patch) if getattr(patch, f.name) is not None}
        return replace(self, **changes)

    def as_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def validate_booking(draft: BookingDraft, *, slots: Collection[str]) -> None:
    """
    Pure field validation, stopping at the first failure.
    Raises ValidationFailedError carrying a message suitable for the client.
    Date format and slot exclusivity are checked elsewhere.
    """
    if any(_is_missing(value) for value in draft.as_dict().values()):
        raise ValidationFailedError("All fields are required.")
    guests = draft.guests
    if isinstance(guests, bool) or not isinstance(guests, int) or guests <= 0:
        raise ValidationFailedError("Guests must be a positive number.")
    if draft.time not in slots:
        raise ValidationFailedError("Invalid time slot selected.")


def parse_booking_date(value: Optional[str]) -> date:
    if not value or not _DATE_RE.match(value):
        raise MalformedInputError("Invalid date format. Use YYYY-MM-DD.")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise MalformedInputError("Invalid date format. Use YYYY-MM-DD.") from exc


def available_slots(
    day: date,
    booked: Iterable[str],
    now: datetime,
    *,
    slots: Sequence[str],
    tz: ZoneInfo,
) -> list[str]:
    """Unbooked slots of `day` in calendar order; on today, only those starting after `now`."""
    taken = set(booked)
    local_now = to_local(now, tz)
    is_today = day == local_now.date()
    return [
        slot
        for slot in slots
        if slot not in taken and (not is_today or slot_starts_at(day, slot, tz) > local_now)
    ]
