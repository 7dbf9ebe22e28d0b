from __future__ import annotations

from typing import Any, Mapping, Protocol

from ..models import Booking


class BookingRepository(Protocol):
    async def claim(
        self,
        *,
        date: str,
        time: str,
        guests: int,
        name: str,
        contact: str,
    ) -> Booking: ...

    async def get(self, booking_id: str) -> Booking | None: ...

    async def update(self, booking_id: str, changes: Mapping[str, Any]) -> Booking | None: ...

    async def delete(self, booking_id: str) -> bool: ...

    async def list_by_date(self, date: str) -> list[Booking]: ...

    async def list_all(self) -> list[Booking]: ...

    async def booked_slots(self, date: str) -> set[str]: ...
