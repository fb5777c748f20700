from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="PUBLIST_"
    )

    # ------------------------------------------------------------------
    # Data source
    # ------------------------------------------------------------------
    DBLP_BASE_URL: str = Field(
        default="https://dblp.org",
        description="Base URL used to expand bare person ids such as 'pid/12/3456'.",
    )

    HTTP_TIMEOUT: float = Field(
        default=30.0,
        description="Seconds to wait for the DBLP server before giving up.",
    )

    MAX_REDIRECTS: int = Field(
        default=10,
        ge=0,
        description=(
            "Maximum number of redirects followed for a single fetch. "
            "A redirect cycle fails once this is exceeded."
        ),
    )

    USER_AGENT: str = Field(
        default="publist/0.1 (+https://dblp.org)",
        description="User-Agent header sent with every request.",
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    LOG_LEVEL: str = Field(
        default="WARNING",
        description="Log level for the CLI's stderr handler (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def base_url(self) -> str:
        return self.DBLP_BASE_URL.rstrip("/")


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Singleton-style accessor so Settings is only constructed once.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings

