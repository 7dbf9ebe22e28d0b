from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..deps import get_scheduling_service
from ..domain.errors import MalformedInputError
from ..schemas import AvailabilityRead
from ..usecases.scheduling import SchedulingService

router = APIRouter(prefix="", tags=["availability"])


@router.get("/available-slots", response_model=AvailabilityRead)
async def get_available_slots(
    date: str | None = Query(default=None, description="Date in YYYY-MM-DD form"),
    service: SchedulingService = Depends(get_scheduling_service),
) -> AvailabilityRead:
    try:
        slots = await service.get_availability(date or "")
    except MalformedInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return AvailabilityRead(date=date or "", available_slots=slots)
