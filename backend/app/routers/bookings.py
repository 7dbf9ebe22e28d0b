import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from ..deps import get_scheduling_service
from ..domain.errors import BookingNotFoundError, MalformedInputError, SlotConflictError, ValidationFailedError
from ..models import Booking
from ..schemas import BookingCreate, BookingRead, BookingUpdate, MessageRead
from ..usecases.scheduling import SchedulingService
from ..utils.audit_log import AuditAction, emit_audit_log

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])

SLOT_TAKEN = "Slot already booked."
NOT_FOUND = "Booking not found."


def _audit(action: AuditAction, booking: Booking) -> None:
    # change is already committed at this point
    try:
        emit_audit_log(
            action=action,
            booking_id=booking.id,
            date=booking.date,
            time=booking.time,
            guests=booking.guests,
        )
    except RuntimeError:
        logger.exception("audit log failed for %s on booking %s", action, booking.id)


@router.post("", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate,
    service: SchedulingService = Depends(get_scheduling_service),
) -> BookingRead:
    try:
        booking = await service.create_booking(payload.to_draft())
    except (ValidationFailedError, MalformedInputError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except SlotConflictError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=SLOT_TAKEN)

    _audit("booking.created", booking)
    return BookingRead.from_db(booking=booking)


@router.get("", response_model=List[BookingRead])
async def list_bookings(
    date: Optional[str] = Query(default=None, description="Only bookings on this YYYY-MM-DD date"),
    service: SchedulingService = Depends(get_scheduling_service),
) -> list[BookingRead]:
    try:
        bookings = await service.list_bookings(date or None)
    except MalformedInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return [BookingRead.from_db(booking=booking) for booking in bookings]


@router.get("/{booking_id}", response_model=BookingRead)
async def get_booking(
    booking_id: str = Path(..., min_length=1),
    service: SchedulingService = Depends(get_scheduling_service),
) -> BookingRead:
    try:
        booking = await service.get_booking(booking_id)
    except BookingNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return BookingRead.from_db(booking=booking)


@router.put("/{booking_id}", response_model=BookingRead)
async def update_booking(
    payload: BookingUpdate,
    booking_id: str = Path(..., min_length=1),
    service: SchedulingService = Depends(get_scheduling_service),
) -> BookingRead:
    try:
        booking = await service.update_booking(booking_id, payload.to_draft())
    except BookingNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    except (ValidationFailedError, MalformedInputError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except SlotConflictError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=SLOT_TAKEN)

    _audit("booking.updated", booking)
    return BookingRead.from_db(booking=booking)


@router.delete("/{booking_id}", response_model=MessageRead)
async def delete_booking(
    booking_id: str = Path(..., min_length=1),
    service: SchedulingService = Depends(get_scheduling_service),
) -> MessageRead:
    try:
        booking = await service.delete_booking(booking_id)
    except BookingNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    _audit("booking.deleted", booking)
    return MessageRead(message="Booking deleted successfully.")
