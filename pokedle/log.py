"""
Logging helpers.

Game events are written as one JSON object per line under the `pokedle.events`
logger, so a log file can be grepped or loaded line by line:

    2026-01-01 12:00:00 | INFO | {"timestamp": "...", "event_type": "GAME_EVENT", ...}
"""

import datetime as dt
import json
import logging
from typing import Any, Optional

events_logger = logging.getLogger("pokedle.events")


def configure_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """Install console (and optional file) handlers on the `pokedle` root logger."""
    root = logging.getLogger("pokedle")
    root.setLevel(level.upper())

    # Prevent duplicate handlers on repeated calls
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def log_game_event(event: str, *, player_id: str, answer_id: str,
                   level: int = logging.INFO, **details: Any) -> None:
    """
    Log a game event (started, guess, won, lost, rejected) as structured JSON.

    Args:
      event     : event name, e.g. 'game_won'
      player_id : opaque player identity
      answer_id : daily answer identity
      **details : extra JSON-serializable fields
    """
    if not events_logger.isEnabledFor(level):
        return
    entry = {
        "timestamp": dt.datetime.now(dt.timezone.utc).isoformat(),
        "event_type": "GAME_EVENT",
        "action": event,
        "player_id": player_id,
        "answer_id": answer_id,
        "details": details,
    }
    events_logger.log(level, json.dumps(entry, ensure_ascii=False))
