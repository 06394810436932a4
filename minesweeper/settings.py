# minesweeper/settings.py
from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings for Minesweeper.
    """

    # --- Gameplay ---
    DIFFICULTY: str | None = None  # "beginner" | "intermediate" | "advanced"; None = ask
    SEED: int | None = None

    # --- Runtime ---
    LOG_LEVEL: str = "WARNING"
    model_config = SettingsConfigDict(
        env_prefix="MS_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
