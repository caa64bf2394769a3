"""Drill configuration loaded from environment variables."""

import logging
import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

StorageBackend = Literal["memory", "file", "cosmos"]

STORAGE_BACKENDS: tuple[str, ...] = ("memory", "file", "cosmos")

DEFAULT_STATS_KEY = "kobun.srs.v1"
DEFAULT_SESSION_SIZE = 10
DEFAULT_SESSION_TTL_SECONDS = 30 * 60


class DrillSettings(BaseModel):
    """Scheduler and storage settings."""

    storage_backend: StorageBackend = "memory"
    storage_dir: str = ".drill"
    stats_key: str = DEFAULT_STATS_KEY
    session_size: int = Field(DEFAULT_SESSION_SIZE, ge=1)
    session_ttl_seconds: int = Field(DEFAULT_SESSION_TTL_SECONDS, ge=1)


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %d", name, raw, default)
        return default
    if value < 1:
        logger.warning("Ignoring non-positive %s=%r, using %d", name, raw, default)
        return default
    return value


@lru_cache()
def get_settings() -> DrillSettings:
    """Get cached drill settings from environment variables (and .env)."""
    load_dotenv()

    backend = os.getenv("DRILL_STORAGE_BACKEND", "memory").strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(
            f"Unknown DRILL_STORAGE_BACKEND {backend!r}; expected one of {', '.join(STORAGE_BACKENDS)}"
        )

    return DrillSettings(
        storage_backend=backend,
        storage_dir=os.getenv("DRILL_STORAGE_DIR", ".drill"),
        stats_key=os.getenv("DRILL_STATS_KEY", DEFAULT_STATS_KEY) or DEFAULT_STATS_KEY,
        session_size=_int_from_env("DRILL_SESSION_SIZE", DEFAULT_SESSION_SIZE),
        session_ttl_seconds=_int_from_env("DRILL_SESSION_TTL_SECONDS", DEFAULT_SESSION_TTL_SECONDS),
    )
