"""
NoteCache Backend — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe loading of the bind address, port and cache directory.
How:   Pydantic Settings reads NOTECACHE_* environment variables (or a .env
       file); the CLI builds its own Settings from command-line flags.
Who:   Imported by the application factory, the CLI and the health route.
When:  The module-level `settings` is loaded once at import time.

Note on the cache directory:
    The directory is NOT created on demand. A missing directory is an
    operator mistake, reported by the storage backend as ConfigurationError.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults suit local development; the CLI requires all three of
    host, port and cache explicitly.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port")

    # ── Note Storage ──────────────────────────────────────────────────────
    # What: Directory holding one <name>.txt file per note
    cache: str = Field(default="./cache", description="Note cache directory")

    # What: Controls verbosity of application logging
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
    model_config = SettingsConfigDict(
        env_prefix="NOTECACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


# Singleton instance used when the app is started as `uvicorn notecache.main:app`
settings = Settings()
