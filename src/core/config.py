"""Application configuration via Pydantic settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration object loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Detailing Studio Console API"
    debug: bool = False
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    database_url: str = Field("sqlite+aiosqlite:///./detailing.db", alias="DATABASE_URL")
    jwt_secret: str = Field(..., alias="JWT_SECRET")
    jwt_algorithm: str = "HS256"
    jwt_expires_in_minutes: int = Field(60 * 12, alias="JWT_EXPIRES_IN")

    operator_access_code: str = Field(..., alias="OPERATOR_ACCESS_CODE")

    default_slot_interval_minutes: int = Field(30, alias="DEFAULT_SLOT_INTERVAL_MINUTES")
    default_box_capacity: int = Field(3, alias="DEFAULT_BOX_CAPACITY")
    public_booking_horizon_days: int = Field(14, alias="PUBLIC_BOOKING_HORIZON_DAYS")

    insights_api_base: str | None = Field(None, alias="INSIGHTS_API_BASE")
    insights_api_key: str | None = Field(None, alias="INSIGHTS_API_KEY")
    insights_timeout_seconds: float = Field(5.0, alias="INSIGHTS_TIMEOUT_SECONDS")


@lru_cache(1)
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()


settings = get_settings()
