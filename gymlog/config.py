from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Record store selection, resolved once at startup by open_store()
    STORE_BACKEND: Literal["sqlite", "memory"] = "sqlite"
    DB_PATH: str = "gym_tracker.db"

    # Presentation defaults
    UNKNOWN_EXERCISE_NAME: str = "Unknown"
    RECENT_WORKOUTS_LIMIT: int = 5
    WEEKLY_WINDOW_DAYS: int = 7
    DEFAULT_UNIT: Literal["kg", "lb"] = "kg"


_SECRET_KEYS = ["APP_ENV", "LOG_LEVEL", "STORE_BACKEND", "DB_PATH", "DEFAULT_UNIT"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Allow Streamlit Cloud secrets to override or provide env values
    overrides: dict = {}
    try:
        import streamlit as _st  # type: ignore
        sec = getattr(_st, "secrets", None)
        if sec:
            for k in _SECRET_KEYS:
                if k in sec and sec[k] is not None and sec[k] != "":
                    overrides[k] = sec[k]
    except Exception:
        # No secrets.toml outside of a Streamlit runtime
        overrides = {}
    return Settings(**overrides)  # type: ignore[call-arg]


def configure_logging(level: str | None = None) -> None:
    settings = get_settings()
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
