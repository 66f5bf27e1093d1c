"""Runtime settings for the JSON:API serializer."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class JSONAPISettings(BaseSettings):
    """Settings read from ``FASTJSONAPI_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="FASTJSONAPI_", case_sensitive=False, extra="ignore", env_file=".env"
    )

    jsonapi_version: str = Field(default="1.0", min_length=1)
    exclude_primary_from_included: bool = True
    default_port: int = Field(default=4000, gt=0, lt=65536)
    log_level: str = "WARNING"
    # singular -> plural overrides consulted before inflect
    irregular_plurals: dict[str, str] = Field(default_factory=dict)


@lru_cache(maxsize=1)
def get_settings() -> JSONAPISettings:
    """Return the process-wide settings instance."""
    return JSONAPISettings()
