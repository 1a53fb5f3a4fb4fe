"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "job_portal"

    # Uploads (avatars and resumes)
    upload_dir: str = "uploads"
    max_upload_bytes: int = 5 * 1024 * 1024

    # Password hashing (bcrypt cost factor)
    bcrypt_rounds: int = Field(12, ge=10, le=16)

    # Sessions
    session_cookie_name: str = "jobportal_session"
    session_cookie_secure: bool = False
    session_ttl_minutes: int = 1440

    # App
    log_level: str = "INFO"

    @property
    def max_upload_mb(self) -> float:
        """Upload ceiling in MiB, for error messages."""
        return self.max_upload_bytes / (1024 * 1024)

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
