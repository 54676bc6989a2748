"""
Configuration settings for recordset.

Uses Pydantic Settings to load environment variables for logging and for the
timestamp layouts accepted by the casting helpers.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TIME_FORMATS = [
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y",
]


class Settings(BaseSettings):
    # Logging
    log_level: str = Field("INFO", alias="RECORDSET_LOG_LEVEL")
    json_logs: bool = Field(False, alias="RECORDSET_JSON_LOGS")

    # Casting
    time_formats: List[str] = Field(
        default_factory=lambda: list(DEFAULT_TIME_FORMATS),
        alias="RECORDSET_TIME_FORMATS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["DEFAULT_TIME_FORMATS", "Settings", "get_settings"]
