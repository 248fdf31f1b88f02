"""Environment configuration and validation.

This module defines the settings used to build the default parser, loaded from environment
variables (optionally via a local `.env` file). Every value is checked at startup so a bad
timezone or locale code fails before the first expression is parsed.
"""

from __future__ import annotations

from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nowish.units.locales import SUPPORTED_LOCALES

Adapter = Literal["datetime", "pandas"]


class Settings(BaseSettings):
    """Parser settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    timezone: str = Field(default="UTC", alias="NOWISH_TIMEZONE")
    locales: str = Field(default="", alias="NOWISH_LOCALES")
    adapter: Adapter = Field(default="datetime", alias="NOWISH_ADAPTER")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Validate that the timezone is a known IANA zone name."""

        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {value!r}") from exc
        return value

    @field_validator("locales")
    @classmethod
    def validate_locales(cls, value: str) -> str:
        """Validate a comma-separated list of locale codes (e.g. `de,ru`)."""

        codes = [code.strip() for code in value.split(",") if code.strip()]
        unknown = sorted(set(codes) - SUPPORTED_LOCALES)
        if unknown:
            raise ValueError(f"unsupported locales: {', '.join(unknown)}")
        return ",".join(codes)

    @property
    def locale_codes(self) -> tuple[str, ...]:
        """Configured locale codes in declaration order."""

        return tuple(code for code in self.locales.split(",") if code)


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
