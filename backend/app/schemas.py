from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, field_serializer

from .domain.services import BookingDraft
from .models import Booking


class AvailabilityRead(BaseModel):
    date: str
    available_slots: list[str]


class BookingCreate(BaseModel):
    # presence and ranges are left to the booking validator
    date: Optional[str] = None
    time: Optional[str] = None
    guests: Any = None
    name: Optional[str] = None
    contact: Optional[str] = None

    def to_draft(self) -> BookingDraft:
        return BookingDraft(**self.model_dump())


class BookingUpdate(BookingCreate):
    pass


class BookingRead(BaseModel):
    id: str
    date: str
    time: str
    guests: int
    name: str
    contact: str
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def _ser_datetime(self, dt: datetime) -> str:
        return dt.replace(tzinfo=timezone.utc).isoformat()

    @classmethod
    def from_db(cls, *, booking: Booking) -> "BookingRead":
        return cls(
            id=booking.id,
            date=booking.date,
            time=booking.time,
            guests=booking.guests,
            name=booking.name,
            contact=booking.contact,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class MessageRead(BaseModel):
    message: str
