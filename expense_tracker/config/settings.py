"""
Configuration Management for Personal Expenses

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
There are no external services, so this is mostly about where the
expense slot lives and how the page presents money.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local key-value slot storage configuration."""
    
    model_config = SettingsConfigDict(
        env_prefix="EXPENSES_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    backend: Literal["file", "memory"] = Field(
        default="file",
        description="Where slots are kept: one JSON file per slot, or process memory"
    )
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding one JSON file per slot"
    )
    slot_key: str = Field(
        default="expenses_v1",
        min_length=1,
        max_length=100,
        description="Name of the slot holding the expense collection"
    )
    max_slot_bytes: int = Field(
        default=5 * 1024 * 1024,
        ge=1024,
        description="Largest value a single slot may hold (browser-like quota)"
    )
    
    @field_validator('slot_key')
    @classmethod
    def validate_slot_key(cls, v: str) -> str:
        """Slot keys become file names, so keep them to a safe alphabet."""
        allowed = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-.")
        if not set(v) <= allowed or v.startswith("."):
            raise ValueError(
                f"Invalid slot key: {v!r}. Use letters, digits, '_', '-' or '.'"
            )
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.
    
    Loads configuration from environment variables and .env file.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    # Logging
    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG regardless of log_level"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for structured logs"
    )
    
    # Presentation
    page_title: str = Field(
        default="Personal Expenses",
        description="Browser tab and header title"
    )
    currency_symbol: str = Field(
        default="$",
        min_length=1,
        max_length=5,
        description="Symbol prepended to formatted amounts"
    )
    
    # Validation thresholds
    max_reasonable_amount: float = Field(
        default=100000.0,
        gt=0,
        description="Amounts above this are logged as suspicious (never rejected)"
    )
    
    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level
    
    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level


class Settings(BaseSettings):
    """
    Root settings container.
    
    Aggregates all sub-settings for easy access.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()
    
    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).
    
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.
    
    Returns a dict of {setting_name: is_valid}, with an extra
    "<name>_error" entry for each section that failed.
    """
    results = {}
    
    settings = get_settings()
    
    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)
    
    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)
    
    return results
