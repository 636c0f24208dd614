"""Environment-driven configuration.

Each group reads its own prefix: ``DJANGO_``, ``EVENTS_`` and ``LOG_``.
A malformed value fails at startup with a pydantic ``ValidationError``.

Example: EVENTS_STORE_BACKEND=memory, EVENTS_MAX_PAGE_SIZE=50, LOG_LEVEL=debug
"""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DjangoSettings(BaseSettings):
    """Framework settings."""

    secret_key: str = Field(default="insecure-dev-key-change-me")
    debug: bool = Field(default=False)
    allowed_hosts: str = Field(default="*", description="Comma-separated host names")
    database_path: str | None = Field(
        default=None,
        validation_alias="DATABASE_PATH",
        description="SQLite file; defaults to db.sqlite3 beside manage.py",
    )
    database_timeout: int = Field(
        default=20, ge=1, description="Seconds a writer waits for the SQLite lock"
    )

    model_config = SettingsConfigDict(
        env_prefix="DJANGO_",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def host_list(self) -> list[str]:
        return [host.strip() for host in self.allowed_hosts.split(",") if host.strip()]


class EventsSettings(BaseSettings):
    """Events engine settings."""

    store_backend: Literal["django", "memory"] = Field(default="django")
    reminder_window_hours: int = Field(default=24, ge=1, le=24 * 30)
    default_page_size: int = Field(default=20, ge=1, le=1000)
    max_page_size: int = Field(default=100, ge=1, le=1000)

    model_config = SettingsConfigDict(
        env_prefix="EVENTS_",
        case_sensitive=False,
        extra="ignore",
    )


class LogSettings(BaseSettings):
    """Logging settings."""

    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENVIRONMENT", "ENV"),
    )
    level: str | None = Field(default=None, description="Overrides the per-environment level")
    dir: str | None = Field(default=None, description="Also write a rotating file here")

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_django_settings() -> DjangoSettings:
    return DjangoSettings()


@lru_cache(maxsize=1)
def get_events_settings() -> EventsSettings:
    return EventsSettings()


def get_log_settings() -> LogSettings:
    return LogSettings()
