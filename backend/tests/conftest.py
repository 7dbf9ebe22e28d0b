from pathlib import Path
from typing import AsyncIterator
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio
from app.config import Settings
from app.database import create_engine, create_session_factory, init_models
from app.domain.calendar import generate_slots
from app.usecases.scheduling import SchedulingConfig, SchedulingService
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'bookings.db'}",
        store_timeout_seconds=10.0,
    )


@pytest_asyncio.fixture
async def engine(settings: Settings) -> AsyncIterator[AsyncEngine]:
    engine = create_engine(settings)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest.fixture
def scheduling_config() -> SchedulingConfig:
    return SchedulingConfig(
        slots=generate_slots(10, 20),
        timezone=ZoneInfo("UTC"),
        store_timeout_seconds=10.0,
    )


@pytest.fixture
def service(
    session_factory: async_sessionmaker[AsyncSession],
    scheduling_config: SchedulingConfig,
) -> SchedulingService:
    return SchedulingService(session_factory, scheduling_config)
