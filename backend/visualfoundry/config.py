"""
Application configuration using Pydantic Settings.

All environment variables are accessed through this config object.
Never use os.getenv() directly in business logic; the settings instance is
built once at startup and passed to the services that need it.
"""

from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    # Application Configuration
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="CORS allowed origins",
    )
    MAX_UPLOAD_SIZE: int = Field(
        default=20 * 1024 * 1024,
        description="Maximum image upload size in bytes (20MB)",
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root logging level",
    )

    # Storage Configuration
    STORAGE_PATH: str = Field(
        default="/tmp/visualfoundry",
        description="Base directory for uploaded images and rendered videos",
    )
    FILE_TTL_HOURS: float = Field(
        default=1,
        description="Age after which leftover files are swept",
    )
    CLEANUP_INTERVAL_MINUTES: int = Field(
        default=15,
        description="Interval between stale file sweeps",
    )

    # Encoder Configuration
    FFMPEG_BINARY: str = Field(
        default="ffmpeg",
        description="Path to the ffmpeg executable",
    )
    RENDER_TIMEOUT: float = Field(
        default=120,
        description="Maximum encode time in seconds",
    )
    MAX_CONCURRENT_RENDERS: int = Field(
        default=0,
        ge=0,
        description="Concurrent encoder processes (0 = number of CPU cores)",
    )
    TITLE_FONT_FILE: str = Field(
        default="/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        description="Font used for the title overlay",
    )
    TAGLINE_FONT_FILE: str = Field(
        default="/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        description="Font used for the tagline overlay",
    )

    @property
    def uploads_path(self) -> Path:
        return Path(self.STORAGE_PATH) / "uploads"

    @property
    def renders_path(self) -> Path:
        return Path(self.STORAGE_PATH) / "renders"


# Global settings instance
settings = Settings()
