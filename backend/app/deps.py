from fastapi import Request

from .usecases.scheduling import SchedulingService


async def get_scheduling_service(request: Request) -> SchedulingService:
    return request.app.state.scheduling_service
