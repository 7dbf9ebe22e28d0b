from functools import lru_cache
import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator


load_dotenv()


class Settings(BaseModel):
    database_url: str = Field(default="sqlite+aiosqlite:///./reservations.db")
    echo_sql: bool = Field(default=False)
    opening_hour: int = Field(default=10, ge=0, le=23)
    closing_hour: int = Field(default=20, ge=0, le=23)
    timezone: str = Field(default="UTC")
    store_timeout_seconds: float = Field(default=5.0, gt=0)
    cors_allowed_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = Field(default="INFO")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000)

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {value}") from exc
        return value

    @model_validator(mode="after")
    def _check_business_hours(self) -> "Settings":
        if self.opening_hour > self.closing_hour:
            raise ValueError("opening_hour must not be later than closing_hour")
        return self


def _split_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    defaults = Settings.model_fields
    return Settings(
        database_url=os.getenv("DATABASE_URL", defaults["database_url"].default),
        echo_sql=bool(int(os.getenv("ECHO_SQL", "0"))),
        opening_hour=int(os.getenv("OPENING_HOUR", defaults["opening_hour"].default)),
        closing_hour=int(os.getenv("CLOSING_HOUR", defaults["closing_hour"].default)),
        timezone=os.getenv("TIMEZONE", defaults["timezone"].default),
        store_timeout_seconds=float(os.getenv("STORE_TIMEOUT_SECONDS", defaults["store_timeout_seconds"].default)),
        cors_allowed_origins=_split_origins(os.getenv("CORS_ALLOWED_ORIGINS", "*")),
        log_level=os.getenv("LOG_LEVEL", defaults["log_level"].default),
        host=os.getenv("HOST", defaults["host"].default),
        port=int(os.getenv("PORT", defaults["port"].default)),
    )
