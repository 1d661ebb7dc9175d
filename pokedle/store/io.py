"""
File I/O for game state and leaderboard exports.

Responsibilities:
- save_state / load_state: round-trip answers, sessions and leaderboard
  entries through one JSON file (what the CLI uses between runs).
- write_leaderboard_csv: tidy CSV, one row per ranked entry.
- timestamp_id: stable UTC ID string for export filenames.

Notes:
- save_state writes to a sibling temp file and renames it into place, so an
  interrupted write never leaves a half-written state file behind.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List
import csv
import datetime as dt
import json
import os

from ..daily.picker import DailyAnswer
from ..engine.session import GameSession, LeaderboardEntry
from .memory import DailyAnswerStore, LeaderboardStore, SessionStore

STATE_VERSION = 1


def save_state(path: str, *, answers: DailyAnswerStore, sessions: SessionStore,
               leaderboard: LeaderboardStore) -> str:
    """
    Serialize all three stores to a JSON file.

    Schema:
      {"version": 1, "answers": [...], "sessions": [...], "leaderboard": [...]}

    Returns:
      The path written (string).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    doc = {
        "version": STATE_VERSION,
        "answers": [a.to_dict() for a in answers.all()],
        "sessions": [s.to_dict() for s in sessions.all()],
        "leaderboard": [e.to_dict() for e in leaderboard.all()],
    }
    tmp = p.with_name(p.name + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(doc, f, indent=2)
    os.replace(tmp, p)
    return str(p)


def load_state(path: str) -> Dict:
    """
    Load a state file written by `save_state` into fresh stores.

    Returns:
      dict with keys "answers", "sessions", "leaderboard" (store instances).
      A missing file yields empty stores.
    """
    p = Path(path)
    if not p.exists():
        return {
            "answers": DailyAnswerStore(),
            "sessions": SessionStore(),
            "leaderboard": LeaderboardStore(),
        }
    with p.open("r", encoding="utf-8") as f:
        doc = json.load(f)
    version = doc.get("version")
    if version != STATE_VERSION:
        raise ValueError(f"unsupported state file version: {version!r}")
    return {
        "answers": DailyAnswerStore(DailyAnswer.from_dict(a) for a in doc.get("answers", [])),
        "sessions": SessionStore(GameSession.from_dict(s) for s in doc.get("sessions", [])),
        "leaderboard": LeaderboardStore(
            LeaderboardEntry.from_dict(e) for e in doc.get("leaderboard", [])
        ),
    }


def write_leaderboard_csv(entries: List[LeaderboardEntry], path: str) -> str:
    """
    Serialize ranked leaderboard entries to CSV.

    Schema (columns):
      rank, player_id, answer_id, solve_seconds, attempts, solved_at

    Returns:
      The path written (string).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fields = ["rank", "player_id", "answer_id", "solve_seconds", "attempts", "solved_at"]
    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()
        for rank, e in enumerate(entries, 1):
            w.writerow({"rank": rank, **e.to_dict()})

    return str(p)


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")
