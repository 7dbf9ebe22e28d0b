from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import AsyncIterator, Callable, Optional
from zoneinfo import ZoneInfo

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..config import Settings
from ..domain.calendar import generate_slots
from ..domain.errors import BookingNotFoundError, SlotConflictError, StoreUnavailableError
from ..domain.repositories import BookingRepository
from ..domain.services import BookingDraft, available_slots, parse_booking_date, validate_booking
from ..infrastructure.repositories import SqlAlchemyBookingRepository, is_slot_conflict
from ..models import Booking
from ..utils.time import local_now

RepositoryFactory = Callable[[AsyncSession], BookingRepository]


@dataclass(frozen=True)
class SchedulingConfig:
    slots: tuple[str, ...]
    timezone: ZoneInfo
    store_timeout_seconds: float = 5.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "SchedulingConfig":
        return cls(
            slots=generate_slots(settings.opening_hour, settings.closing_hour),
            timezone=ZoneInfo(settings.timezone),
            store_timeout_seconds=settings.store_timeout_seconds,
        )


class SchedulingService:
    """
    Booking operations and availability queries.

    Holds no mutable state: every call opens its own transaction, so any
    number of instances may share one database. Slot exclusivity relies on
    the store's unique constraint, not on a prior read.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        config: SchedulingConfig,
        repository_factory: RepositoryFactory = SqlAlchemyBookingRepository,
    ) -> None:
        self._session_factory = session_factory
        self._repository_factory = repository_factory
        self.config = config

    @property
    def slots(self) -> tuple[str, ...]:
        return self.config.slots

    async def get_availability(self, date: str, now: Optional[datetime] = None) -> list[str]:
        day = parse_booking_date(date)
        async with self._transaction() as repo:
            booked = await repo.booked_slots(date)
        return available_slots(
            day,
            booked,
            now or local_now(self.config.timezone),
            slots=self.config.slots,
            tz=self.config.timezone,
        )

    async def create_booking(self, draft: BookingDraft) -> Booking:
        validate_booking(draft, slots=self.config.slots)
        parse_booking_date(draft.date)
        async with self._transaction() as repo:
            return await repo.claim(
                date=draft.date,  # type: ignore[arg-type]
                time=draft.time,  # type: ignore[arg-type]
                guests=draft.guests,
                name=draft.name.strip(),  # type: ignore[union-attr]
                contact=draft.contact.strip(),  # type: ignore[union-attr]
            )

    async def get_booking(self, booking_id: str) -> Booking:
        async with self._transaction() as repo:
            booking = await repo.get(booking_id)
        if booking is None:
            raise BookingNotFoundError("booking not found")
        return booking

    async def update_booking(self, booking_id: str, patch: BookingDraft) -> Booking:
        async with self._transaction() as repo:
            current = await repo.get(booking_id)
            if current is None:
                raise BookingNotFoundError("booking not found")
            merged = _draft_of(current).merged(patch)
            validate_booking(merged, slots=self.config.slots)
            parse_booking_date(merged.date)
            changes = {key: value for key, value in patch.as_dict().items() if value is not None}
            for key in ("name", "contact"):
                if key in changes:
                    changes[key] = changes[key].strip()
            updated = await repo.update(booking_id, changes)
            if updated is None:
                raise BookingNotFoundError("booking not found")
            return updated

    async def delete_booking(self, booking_id: str) -> Booking:
        """Remove the booking, releasing its slot, and return the removed record."""
        async with self._transaction() as repo:
            booking = await repo.get(booking_id)
            if booking is None or not await repo.delete(booking_id):
                raise BookingNotFoundError("booking not found")
        return booking

    async def list_bookings(self, date: Optional[str] = None) -> list[Booking]:
        if date is not None:
            parse_booking_date(date)
        async with self._transaction() as repo:
            if date is not None:
                return await repo.list_by_date(date)
            return await repo.list_all()

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[BookingRepository]:
        try:
            async with asyncio.timeout(self.config.store_timeout_seconds):
                async with self._session_factory() as session, session.begin():
                    yield self._repository_factory(session)
        except TimeoutError as exc:
            raise StoreUnavailableError("booking store timed out") from exc
        except IntegrityError as exc:
            # deferred constraints surface at commit rather than at flush
            if is_slot_conflict(exc):
                raise SlotConflictError("slot is already booked") from exc
            raise
        except (OperationalError, InterfaceError, PoolTimeoutError) as exc:
            raise StoreUnavailableError("booking store unavailable") from exc


def _draft_of(booking: Booking) -> BookingDraft:
    return BookingDraft(
        date=booking.date,
        time=booking.time,
        guests=booking.guests,
        name=booking.name,
        contact=booking.contact,
    )
