# src/trolley/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Supports environment variables and a .env file with validation.

Files that USE this module:
- trolley.app (builds the service container from settings)
- trolley.adapters.providers.fixer (rates API URL and HTTP timeout)
- trolley.adapters.persistence.rate_store (offline rates file path)
- trolley.adapters.network.manager (HTTP timeout)
- trolley.application.currency_converter (base/local currency codes)

Files that this module USES:
- trolley.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from pathlib import Path  # Object-oriented filesystem paths
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from trolley.shared.validators import (
    normalize_currency_code,  # Uppercase/strip currency codes
    validate_currency_code,  # Validate ISO 4217 code format
    validate_http_url,  # Validate absolute http(s) URLs
)


class Settings(BaseSettings):
    """SDK settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Trolley backend ---
    api_url: str = Field(default="http://localhost:8080/API", alias="TROLLEY_API_URL")
    # Root used for the real connection; derived from api_url when empty
    connection_url: Optional[str] = Field(default=None, alias="TROLLEY_CONNECTION_URL")

    # --- Currency ---
    base_currency: str = Field(default="GBP", alias="TROLLEY_BASE_CURRENCY")
    # Overrides the locale currency when set
    local_currency: Optional[str] = Field(default=None, alias="TROLLEY_LOCAL_CURRENCY")
    rates_api_url: str = Field(default="https://api.fixer.io", alias="RATES_API_URL")

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Persistence ---
    offline_rates_file: Path = Field(
        default=Path("./data/offline_rates.json"), alias="OFFLINE_RATES_FILE"
    )

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="TROLLEY_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @field_validator("api_url", "rates_api_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        if not validate_http_url(v):
            raise ValueError(f"Invalid URL: {v!r}")
        return v

    @field_validator("connection_url")
    @classmethod
    def validate_connection_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate optional connection URL; empty means derived."""
        if not v:
            return None
        if not validate_http_url(v):
            raise ValueError(f"Invalid URL: {v!r}")
        return v

    @field_validator("base_currency")
    @classmethod
    def validate_base_currency(cls, v: str) -> str:
        """Validate base currency code."""
        code = normalize_currency_code(v)
        if not validate_currency_code(code):
            raise ValueError("TROLLEY_BASE_CURRENCY must be an ISO 4217 code")
        return code

    @field_validator("local_currency")
    @classmethod
    def validate_local_currency(cls, v: Optional[str]) -> Optional[str]:
        """Validate optional local currency override."""
        if not v:
            return None
        code = normalize_currency_code(v)
        if not validate_currency_code(code):
            raise ValueError("TROLLEY_LOCAL_CURRENCY must be an ISO 4217 code")
        return code

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level name."""
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return level


# Global settings instance
settings = Settings()
