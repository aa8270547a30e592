"""
AP Exam Sync: Server Configuration
===================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a default `settings` object.
Who:   Imported by the application factory, the store and the entry point.
When:  Loaded once at module import time; `create_app()` accepts an override
       so tests can point the store at a temporary file.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List


class Settings(BaseSettings):
    """
    Server settings loaded from environment variables.

    All settings have defaults suitable for local development. Field names
    map to upper-case environment variables (PORT, DB_FILE, CORS_ORIGINS, ...).
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # ── Document Store ────────────────────────────────────────────────────
    # What: Path of the JSON document holding every collection
    # Format: {"courses": [], "users": [], "communityNotes": [], "analytics": {...}}
    db_file: str = Field(
        default="./db.json",
        description="Path of the JSON document store",
    )

    # What: Seed the three example courses when the course list is empty
    seed_courses: bool = Field(default=True)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated origins, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Logging ───────────────────────────────────────────────────────────
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DB_FILE and db_file both work
        "extra": "ignore",
    }


# Default instance used by `apsync.main:app`
settings = Settings()
