"""
AgriScan Backend - Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a module-level `settings` object.
Who:   Read by the application factory, Alembic and the test suite.
When:  Loaded once at module import time.

The Gemini key is the only secret. It is optional: without it the service
still starts and `/gemini` answers with a fixed "not configured" message.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Accepted values for DOCUMENT_STORE
DOCUMENT_STORE_BACKENDS = {"firestore", "sql", "memory"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments set
    GEMINI_API_KEY and either Firebase credentials or DATABASE_URL.
    """

    # ── Google Gemini ─────────────────────────────────────────────────────
    # How to obtain: https://aistudio.google.com/app/apikey
    gemini_api_key: str = Field(
        default="",
        description="Google Gemini API key for text generation",
    )

    gemini_model: str = Field(default="gemini-2.5-flash-preview-05-20")

    # ── Document Store ────────────────────────────────────────────────────
    # firestore: Cloud Firestore through firebase-admin (production)
    # sql:       single `documents` table through async SQLAlchemy
    # memory:    process-local dicts, lost on restart (tests, demos)
    document_store: str = Field(default="firestore")

    # Both optional: firebase-admin falls back to application default
    # credentials and the project they belong to.
    firebase_project_id: Optional[str] = Field(default=None)
    firebase_credentials_path: Optional[str] = Field(default=None)

    # Only used when document_store == "sql"
    database_url: str = Field(
        default="sqlite+aiosqlite:///./agriscan.db",
        description="Async SQLAlchemy connection URL",
    )
    db_pool_pre_ping: bool = Field(default=True)

    # ── CORS ──────────────────────────────────────────────────────────────
    # The web and mobile clients are served from arbitrary origins
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

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

    @field_validator("document_store")
    @classmethod
    def validate_document_store(cls, v: str) -> str:
        lower = v.strip().lower()
        if lower not in DOCUMENT_STORE_BACKENDS:
            raise ValueError(
                f"Invalid document_store '{v}'. Must be one of: {sorted(DOCUMENT_STORE_BACKENDS)}"
            )
        return lower

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # GEMINI_API_KEY and gemini_api_key both work
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        Report settings the service can run without but should not.

        Called from the lifespan handler, which logs the error and keeps
        serving: a missing key only degrades the AI endpoint.
        """
        errors = []
        if not self.gemini_api_key:
            errors.append(
                "GEMINI_API_KEY is not set; /gemini will answer with a "
                "'not configured' message. "
                "Get a key at https://aistudio.google.com/app/apikey"
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


settings = Settings()
