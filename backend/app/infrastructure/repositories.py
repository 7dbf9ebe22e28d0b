from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.errors import SlotConflictError
from ..domain.repositories import BookingRepository
from ..models import SLOT_UNIQUE_CONSTRAINT, Booking

_UPDATABLE_FIELDS = frozenset({"date", "time", "guests", "name", "contact"})


def is_slot_conflict(exc: IntegrityError) -> bool:
    """True if the violation is the (date, time) uniqueness constraint."""
    message = str(exc.orig if exc.orig is not None else exc).lower()
    # postgres/mysql report the constraint name, sqlite reports the columns
    return SLOT_UNIQUE_CONSTRAINT in message or "bookings.date, bookings.time" in message


def _utc_now_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class SqlAlchemyBookingRepository(BookingRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def claim(
        self,
        *,
        date: str,
        time: str,
        guests: int,
        name: str,
        contact: str,
    ) -> Booking:
        now = _utc_now_naive()
        booking = Booking(
            id=uuid.uuid4().hex,
            date=date,
            time=time,
            guests=guests,
            name=name,
            contact=contact,
            created_at=now,
            updated_at=now,
        )
        self.session.add(booking)
        await self._flush(date, time)
        return booking

    async def get(self, booking_id: str) -> Booking | None:
        return await self.session.get(Booking, booking_id)

    async def get_for_update(self, booking_id: str) -> Booking | None:
        result = await self.session.scalar(select(Booking).where(Booking.id == booking_id).with_for_update())
        return result if isinstance(result, Booking) else None

    async def update(self, booking_id: str, changes: Mapping[str, Any]) -> Booking | None:
        booking = await self.get_for_update(booking_id)
        if booking is None:
            return None
        for field, value in changes.items():
            if field not in _UPDATABLE_FIELDS:
                raise ValueError(f"field cannot be updated: {field}")
            setattr(booking, field, value)
        booking.updated_at = _utc_now_naive()
        await self._flush(booking.date, booking.time)
        return booking

    async def delete(self, booking_id: str) -> bool:
        booking = await self.get_for_update(booking_id)
        if booking is None:
            return False
        await self.session.delete(booking)
        await self.session.flush()
        return True

    async def list_by_date(self, date: str) -> list[Booking]:
        rows = await self.session.scalars(select(Booking).where(Booking.date == date).order_by(Booking.time))
        return list(rows.all())

    async def list_all(self) -> list[Booking]:
        rows = await self.session.scalars(select(Booking).order_by(Booking.date, Booking.time))
        return list(rows.all())

    async def booked_slots(self, date: str) -> set[str]:
        rows = await self.session.scalars(select(Booking.time).where(Booking.date == date))
        return set(rows.all())

    async def _flush(self, date: str, time: str) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            if is_slot_conflict(exc):
                raise SlotConflictError(f"slot {date} {time} is already booked") from exc
            raise
