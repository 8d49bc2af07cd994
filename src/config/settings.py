"""
Hi-Lo - Application Settings

Loads configuration from environment variables using Pydantic Settings.
On Streamlit Cloud, bridges st.secrets into env vars so Pydantic can read them.
"""

import logging
import os
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings

from src.engine.base import TimingConfig

_SECRET_KEYS = (
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "DEBUG",
    "LOG_LEVEL",
    "STORAGE_BACKEND",
    "SAVE_SLOT",
)


def _load_streamlit_secrets() -> None:
    """Bridge Streamlit Cloud secrets into environment variables."""
    try:
        import streamlit as st

        for key in _SECRET_KEYS:
            if key not in os.environ and key in st.secrets:
                os.environ[key] = str(st.secrets[key])
    except Exception:
        # No secrets file outside Streamlit Cloud
        pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase (only needed for the supabase storage backend)
    supabase_url: str | None = None
    supabase_anon_key: str | None = None

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Persistence
    storage_backend: Literal["memory", "file", "supabase"] = "file"
    save_path: str = ".hilo"
    save_slot: str = "current_game"

    # Timing (seconds)
    result_display_seconds: float = 1.0
    correct_guess_buffer_seconds: float = 0.1
    draw_cooldown_seconds: float = 1.5

    # Fixed shuffle for reproducible games; None shuffles randomly
    shuffle_seed: int | None = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    def timing(self) -> TimingConfig:
        """Validated delay settings for the engine."""
        return TimingConfig(
            result_display_seconds=self.result_display_seconds,
            correct_guess_buffer_seconds=self.correct_guess_buffer_seconds,
            draw_cooldown_seconds=self.draw_cooldown_seconds,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    _load_streamlit_secrets()
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply LOG_LEVEL (DEBUG when debug is on) to the root logger."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
