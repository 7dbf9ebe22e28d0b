from pathlib import Path
from typing import Iterator

import pytest
from app.config import Settings, get_settings
from app.database import create_engine, init_models
from pydantic import ValidationError
from sqlalchemy import inspect


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_get_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENING_HOUR", "12")
    monkeypatch.setenv("CLOSING_HOUR", "22")
    monkeypatch.setenv("TIMEZONE", "Asia/Tokyo")
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("STORE_TIMEOUT_SECONDS", "1.5")

    settings = get_settings()
    assert (settings.opening_hour, settings.closing_hour) == (12, 22)
    assert settings.timezone == "Asia/Tokyo"
    assert settings.cors_allowed_origins == ["http://a.test", "http://b.test"]
    assert settings.store_timeout_seconds == 1.5


def test_defaults_match_restaurant_hours(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("OPENING_HOUR", "CLOSING_HOUR", "TIMEZONE"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert (settings.opening_hour, settings.closing_hour, settings.timezone) == (10, 20, "UTC")


def test_rejects_inverted_business_hours() -> None:
    with pytest.raises(ValidationError):
        Settings(opening_hour=21, closing_hour=20)


def test_rejects_unknown_timezone() -> None:
    with pytest.raises(ValidationError):
        Settings(timezone="Mars/Olympus_Mons")


@pytest.mark.asyncio
async def test_init_models_creates_bookings_table(tmp_path: Path) -> None:
    engine = create_engine(Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'schema.db'}"))
    try:
        await init_models(engine)
        async with engine.connect() as conn:
            names = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
            uniques = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_unique_constraints("bookings"))
    finally:
        await engine.dispose()
    assert "bookings" in names
    assert any(sorted(u["column_names"]) == ["date", "time"] for u in uniques)
