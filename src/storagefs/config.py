"""Configuration management for storagefs."""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()


DEFAULT_CONFIG_FOLDERS = [
    "simwrapper",
    ".simwrapper",
]


class Config(BaseModel):
    """Runtime configuration shared by every storage root."""

    # GitHub Settings
    github_token: Optional[str] = Field(default=None)
    github_api_url: str = Field(default="https://api.github.com")

    # Timeouts (seconds)
    request_timeout: float = Field(default=30.0)
    auth_timeout: float = Field(default=30.0)
    permission_timeout: float = Field(default=120.0)

    # Decompression
    max_gunzip_depth: int = Field(default=8)

    # Discovery Settings
    config_folders: list[str] = Field(default_factory=lambda: DEFAULT_CONFIG_FOLDERS.copy())

    # Registry / Logging
    roots_file: Optional[Path] = Field(default=None)
    log_level: str = Field(default="WARNING")

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        def _parse_int(value: Optional[str], fallback: int) -> int:
            try:
                return int(value) if value is not None else fallback
            except ValueError:
                return fallback

        def _parse_float(value: Optional[str], fallback: float) -> float:
            try:
                return float(value) if value is not None else fallback
            except ValueError:
                return fallback

        config_folders = DEFAULT_CONFIG_FOLDERS.copy()
        extra_folders = os.getenv("CONFIG_FOLDERS")
        if extra_folders:
            config_folders.extend(
                [entry.strip().lower() for entry in extra_folders.split(",") if entry.strip()]
            )

        roots_file_env = os.getenv("ROOTS_FILE")

        return cls(
            github_token=os.getenv("GITHUB_TOKEN") or None,
            github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
            request_timeout=_parse_float(os.getenv("HTTP_TIMEOUT"), 30.0),
            auth_timeout=_parse_float(os.getenv("AUTH_TIMEOUT"), 30.0),
            permission_timeout=_parse_float(os.getenv("PERMISSION_TIMEOUT"), 120.0),
            max_gunzip_depth=_parse_int(os.getenv("MAX_GUNZIP_DEPTH"), 8),
            config_folders=config_folders,
            roots_file=Path(roots_file_env) if roots_file_env else None,
            log_level=os.getenv("LOG_LEVEL", "WARNING"),
        )
