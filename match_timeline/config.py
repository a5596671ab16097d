"""Configuration for the match timeline engine."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings with sensible defaults for local runs."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(os.path.dirname(__file__), "..", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: str | None = Field(default=None, alias="LOG_LEVEL")
    service_name: str = Field(default="match-timeline", alias="SERVICE_NAME")
    unknown_player_label: str = Field(default="Unknown Player", alias="UNKNOWN_PLAYER_LABEL")
    unknown_team_label: str = Field(default="Unknown Team", alias="UNKNOWN_TEAM_LABEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
