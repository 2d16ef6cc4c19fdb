"""
testament.settings
==================

Configuration settings for the Testament registry.

Module‑level constants cover the storage and HTTP layers and may be
overridden via environment variables.  Behaviour of the registry itself
(input policy, default check‑in period) lives on the pydantic
:class:`Settings` model, read from ``TESTAMENT_*`` variables or a
``.env`` file.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .validation import (
    MAX_CHECK_IN_PERIOD,
    MIN_CHECK_IN_PERIOD,
    InputPolicy,
    validate_check_in_period,
)


# ---------------------------------------------------------------------------
# Database settings
# ---------------------------------------------------------------------------
def default_db_file() -> Path:
    """``TESTAMENT_DB_FILE`` if set, else ``testament.db`` in the working directory."""
    return Path(os.environ.get("TESTAMENT_DB_FILE", Path.cwd() / "testament.db"))


DB_FILE = default_db_file()
DB_URL = f"sqlite:///{DB_FILE}"
DB_ECHO = os.environ.get("TESTAMENT_DB_ECHO", "False").lower() == "true"

# API settings
# ---------------------------------------------------------------------------
API_DEBUG = os.environ.get("TESTAMENT_API_DEBUG", "False").lower() == "true"


# ---------------------------------------------------------------------------
# Pydantic settings model for registry behaviour
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Registry settings, loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TESTAMENT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    input_policy: InputPolicy = Field(
        InputPolicy.CLAMP,
        description="'clamp' replaces out-of-range shares/periods with the minimum, 'strict' rejects them",
    )
    default_check_in_period: int = Field(
        MIN_CHECK_IN_PERIOD,
        description="Period used when check_in is called without one (seconds)",
    )
    db_url: str = Field(DB_URL, description="SQLAlchemy URL of the persistent ledger")

    @field_validator("default_check_in_period")
    @classmethod
    def _period_in_bounds(cls, value: int) -> int:
        if not validate_check_in_period(value):
            raise ValueError(
                f"default_check_in_period must be within "
                f"[{MIN_CHECK_IN_PERIOD}, {MAX_CHECK_IN_PERIOD}]"
            )
        return value


# Initialize settings
settings = Settings()
