"""
Configuration.

All settings come from environment variables (optionally loaded from a `.env`
file in the working directory) with defaults that run the bundled game.
CLI flags override these at the call site.
"""

import os
from dotenv import load_dotenv

from .daily.picker import DEFAULT_SPRITE_URL
from .datasets.io import DEFAULT_NAMES_PATH

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Base configuration."""

    # Game rules
    MAX_ATTEMPTS = int(os.getenv("POKEDLE_MAX_ATTEMPTS", 6))
    STRICT_NAMES = _env_bool("POKEDLE_STRICT_NAMES", "true")

    # Data
    NAMES_PATH = os.getenv("POKEDLE_NAMES_PATH", str(DEFAULT_NAMES_PATH))
    STATE_PATH = os.getenv("POKEDLE_STATE_PATH", "pokedle_state.json")
    SPRITE_URL = os.getenv("POKEDLE_SPRITE_URL", DEFAULT_SPRITE_URL)

    # Logging
    LOG_LEVEL = os.getenv("POKEDLE_LOG_LEVEL", "WARNING")

