"""
NoteSync: Application Configuration
===================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the server (port, prefix, static root, logging) and by
       the client package (base URL, notification lifetime, timeout).
When:  Loaded once at module import time.
Why:   One typed place for every knob: a bad PORT or LOG_LEVEL fails at
       startup with a readable error instead of deep inside uvicorn.

Both halves of the system read the same Settings class; a client process
simply ignores the server fields and vice versa.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Packaged SPA entry document (index.html) lives next to this module
DEFAULT_STATIC_ROOT = str(Path(__file__).resolve().parent / "static")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development; the listening
    port honours the conventional PORT override.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3001, ge=1, le=65535)

    # What: Prefix under which the notes API is mounted (e.g. /api/notes)
    api_prefix: str = Field(default="/api")

    # What: Directory holding the client build; index.html is the SPA entry
    static_root: str = Field(default=DEFAULT_STATIC_ROOT)

    # Format: Comma-separated origins, "*" allows any
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

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

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, v: str) -> str:
        """Strips trailing slashes and guarantees a leading one ("" stays "")."""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    # ── Client ────────────────────────────────────────────────────────────
    # What: Base URL the transport client prefixes to /notes
    api_base_url: str = Field(default="http://localhost:3001/api")

    # What: Lifetime of a transient error notification, in seconds
    notification_timeout: float = Field(default=5.0, gt=0)

    # What: Per-request timeout for the transport client; None waits forever
    client_timeout: Optional[float] = Field(default=None, gt=0)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # PORT and port both work
        "extra": "ignore",
    }


settings = Settings()
