"""
Centralized configuration for the SkillSwap client.

All settings are loaded from environment variables with sensible defaults.
Variables are namespaced with the SKILLSWAP_ prefix (e.g., SKILLSWAP_API_BASE_URL).
"""

from functools import lru_cache
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SKILLSWAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "SkillSwap"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_base_url: str = "http://localhost:5000"
    request_timeout: float = 30.0  # seconds

    # Email verification
    otp_ttl_seconds: int = 600
    otp_resend_window_seconds: int = 60  # resend opens when this much time is left
    otp_code_length: int = 6
    countdown_interval_seconds: float = 1.0

    # User directory
    users_per_page: int = 9

    # Client-local storage (pending verification, session cookies)
    local_storage_path: Path = Path.home() / ".skillswap" / "local_storage.json"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
