"""Runtime configuration for Workforce Insights.

Values come from the process environment or a local ``.env`` file. The
database URL is the only secret; everything else has a working default.
"""

from enum import StrEnum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ASYNC_DRIVER_SCHEME = "postgresql+asyncpg://"

# Schemes handed out by hosting dashboards that need the async driver added.
_SYNC_SCHEMES = ("postgres://", "postgresql://")


class Environment(StrEnum):
    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Service settings.

    DATABASE_URL may be pasted as the plain ``postgresql://`` connection
    string from the Supabase dashboard; it is rewritten to use asyncpg.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    DATABASE_URL: str = Field(
        default=f"{ASYNC_DRIVER_SCHEME}postgres:postgres@localhost:54322/postgres",
        description="Connection string for the Postgres database holding the analytics tables.",
    )
    QUERY_ROW_LIMIT: int | None = Field(
        default=None,
        gt=0,
        description="Optional cap on rows fetched per table. None = no limit.",
    )
    LOG_LEVEL: LogLevel = LogLevel.INFO
    ENVIRONMENT: Environment = Environment.DEV

    @field_validator("DATABASE_URL")
    @classmethod
    def _use_async_driver(cls, v: str) -> str:
        for scheme in _SYNC_SCHEMES:
            if v.startswith(scheme):
                return ASYNC_DRIVER_SCHEME + v[len(scheme):]
        return v

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == Environment.PROD


def get_settings() -> Settings:
    """Factory function for dependency injection via FastAPI Depends."""
    return Settings()
