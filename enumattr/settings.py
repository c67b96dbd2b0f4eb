"""
enumattr.settings
=================

Configuration for the enumattr persistence host.

Module‑level constants are read straight from the environment so that
``enumattr.db`` can build its engine at import time; the pydantic
``Settings`` model layers ``.env`` support on top and is what the rest of
the package reads.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

# ---------------------------------------------------------------------------
# Base directories
# ---------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent

# Database settings
# ---------------------------------------------------------------------------
DB_FILE = os.environ.get("ENUMATTR_DB_FILE", BASE_DIR / "enumattr.db")
DB_URL = f"sqlite:///{DB_FILE}"
DB_ECHO = os.environ.get("ENUMATTR_DB_ECHO", "False").lower() == "true"

# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("ENUMATTR_LOG_LEVEL", "WARNING")


class Settings(BaseSettings):
    """Pydantic model for runtime settings, loaded from environment variables."""

    db_url: str = Field(default=DB_URL, description="SQLAlchemy URL of the record store")
    db_echo: bool = Field(default=DB_ECHO, description="Echo SQL statements")
    log_level: str = Field(default=LOG_LEVEL, description="Level used by the CLI's log handler")

    class Config:
        """Configuration for the settings model."""
        env_prefix = "ENUMATTR_"
        env_file = ".env"
        case_sensitive = False


settings = Settings()
