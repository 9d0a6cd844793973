# ------------------------------------------------------------
# Module: blocksig/core/config.py
# Purpose: Central, typed application settings with optional env overrides.
# ------------------------------------------------------------

"""Typed configuration hub for the signature service and CLI.

Responsibilities
----------------
- Provide validated defaults for logging, server, and hashing knobs.
- Keep the worker-count target an explicit setting, not a hidden constant.
- Offer `settings_from_env()` for `.env` / `BLOCKSIG_*` overrides.

Notes
-----
- Extras are forbidden to surface typos/unknown keys early.
- The module-level `settings` uses code defaults only; call
  `settings_from_env()` at process entry when env overrides are wanted.
"""

from __future__ import annotations

import os
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

ENV_PREFIX = "BLOCKSIG_"


class Settings(BaseModel):
    """
    Application configuration with code defaults.

    Notes
    -----
    - Block sizes are configured in MiB; the engine works in bytes.
    - `TARGET_WORKERS` sizes work items and caps the hashing pool.
    """

    model_config = ConfigDict(extra="forbid")

    # App toggles
    APP_ENV: Literal["dev", "prod"] = "dev"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    ACCESS_LOG: bool = True
    MUTE_ALL_LOGS: bool = False

    # Server mode
    HOST: str = "0.0.0.0"
    PORT: int = Field(8000, ge=1, le=65535)
    SHUTDOWN_GRACE_S: int = Field(
        5, ge=0, description="Grace period for in-flight requests on shutdown"
    )

    # ---- Hashing knobs ----
    TARGET_WORKERS: int = Field(30, ge=1, description="Concurrent work items")
    DEFAULT_BLOCK_SIZE_MB: int = Field(1, ge=1)
    # Upper bound guards against pathological per-block allocations.
    MAX_BLOCK_SIZE_MB: int = Field(2047, ge=1)
    READ_CHUNK_BYTES: int = Field(
        1024 * 1024, ge=4096, description="Read granularity inside a block"
    )

    @model_validator(mode="after")
    def _default_within_max(self) -> Settings:
        if self.DEFAULT_BLOCK_SIZE_MB > self.MAX_BLOCK_SIZE_MB:
            raise ValueError("DEFAULT_BLOCK_SIZE_MB must not exceed MAX_BLOCK_SIZE_MB")
        return self

    @computed_field(return_type=int)
    def max_block_size_bytes(self) -> int:
        return self.MAX_BLOCK_SIZE_MB * 1024 * 1024


def settings_from_env(**overrides: Any) -> Settings:
    """Create a Settings instance from `.env`, `BLOCKSIG_*` env vars, and overrides.

    Example:
        >>> # BLOCKSIG_TARGET_WORKERS=8 in the environment
        >>> settings_from_env().TARGET_WORKERS
        8

    Notes
    -----
    - Explicit keyword overrides win over the environment.
    - Values pass through pydantic validation (strings coerced to int/bool).
    """
    load_dotenv()
    data: dict[str, Any] = {}
    for name in Settings.model_fields:
        raw = os.getenv(ENV_PREFIX + name)
        if raw is not None:
            data[name] = raw
    data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings.model_validate(data)


# Eagerly instantiate once at import; code-only defaults.
settings = Settings()

__all__ = ["ENV_PREFIX", "Settings", "settings", "settings_from_env"]
