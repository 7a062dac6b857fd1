"""
Application configuration using Pydantic Settings.

Automatically loads environment variables from .env files.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MiB


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    # Set by the hosting platform; the ASGI app is exported instead of listening
    vercel: bool = False

    # Storage areas
    upload_dir: Path = Path("uploads")
    download_dir: Path = Path("downloads")

    # Upload limits
    upload_field_name: str = "pdf"
    max_upload_bytes: int = Field(default=MAX_UPLOAD_BYTES, gt=0)

    # History
    history_limit: int = Field(default=20, ge=1)

    # Generated document
    docx_font_name: str = "Arial"
    docx_font_size: float = Field(default=12, gt=0)

    # Optional wall-clock limit for a single conversion, in seconds
    conversion_timeout: float | None = Field(default=None, gt=0)

    cors_origins: list[str] = ["*"]

    # Debug flags
    log_level: str = "INFO"
    debug: bool = False

    model_config = SettingsConfigDict(
        # Load from .env file in the package directory
        env_file=Path(__file__).parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        # Case insensitive environment variable names
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration loaded from environment.
    """
    return Settings()
