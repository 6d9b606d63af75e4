from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    dberror settings loaded from DBERROR_* environment variables (or a .env file).

    Only host applications that call setup_logging() or mount the FastAPI
    handlers need these; get_error() itself reads no configuration.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"
    SERVICE_NAME: str = "dberror"

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path | None = None
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5

    # API responses
    # When true, table/constraint/severity are included in error payloads.
    EXPOSE_ERROR_DETAIL: bool = False

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str | None) -> str | None:
        """logging expects level names in upper case."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def normalize_log_format(cls, v: str | None) -> str | None:
        return v.lower() if isinstance(v, str) else v

    model_config = SettingsConfigDict(
        env_prefix="DBERROR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Settings come only from the environment, so one instance per process is enough.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
