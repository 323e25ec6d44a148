"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"
ENV_PREFIX = "NOTIFYHUB_"

# Upper bounds enforced on the corresponding notification fields.
MAX_DESCRIPTION_LENGTH = 1000
MAX_SUMMARY_LENGTH = 250


class Settings(BaseSettings):
    """Configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    batch_limit: int = Field(
        default=0,
        description="Buffered notifications tolerated before a publish triggers a flush",
        ge=0,
    )
    description_limit: int = Field(
        default=MAX_DESCRIPTION_LENGTH,
        description="Length notification descriptions are truncated to",
        gt=0,
    )
    summary_limit: int = Field(
        default=MAX_SUMMARY_LENGTH,
        description="Length notification summaries are truncated to",
        gt=0,
    )
    database_url: str = Field(
        default="sqlite:///./notifyhub.db",
        description="Database connection URL used by SQLAlchemy",
        min_length=1,
    )
    database_echo: bool = Field(
        default=False, description="Log every SQL statement emitted by SQLAlchemy"
    )
    app_timezone: str = Field(
        default="UTC", description="Timezone used for notification timestamps"
    )

    @model_validator(mode="after")
    def _validate_limits(self) -> "Settings":
        if self.description_limit > MAX_DESCRIPTION_LENGTH:
            raise ValueError(
                f"NOTIFYHUB_DESCRIPTION_LIMIT cannot exceed {MAX_DESCRIPTION_LENGTH}"
            )
        if self.summary_limit > MAX_SUMMARY_LENGTH:
            raise ValueError(
                f"NOTIFYHUB_SUMMARY_LIMIT cannot exceed {MAX_SUMMARY_LENGTH}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = [
    "MAX_DESCRIPTION_LENGTH",
    "MAX_SUMMARY_LENGTH",
    "Settings",
    "get_settings",
    "reset_settings_cache",
]
