"""
In-memory stores for daily answers, game sessions and leaderboard entries.

These are the persistence collaborators the game service talks to. Each one
enforces the uniqueness rule of its record type:
  - DailyAnswerStore : one answer per UTC date
  - SessionStore     : one session per (player_id, answer_id)
  - LeaderboardStore : one entry per (player_id, answer_id)

Each store guards its dict with its own lock; serializing guesses on a single
session is the game service's job, not the store's.
"""

from __future__ import annotations

import datetime as dt
import logging
import threading
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..daily.picker import DailyAnswer
from ..engine.errors import DuplicateEntry
from ..engine.session import GameSession, LeaderboardEntry

logger = logging.getLogger(__name__)

SessionKey = Tuple[str, str]


class DailyAnswerStore:
    def __init__(self, answers: Iterable[DailyAnswer] = ()):
        self._lock = threading.Lock()
        self._by_date: Dict[dt.date, DailyAnswer] = {a.date: a for a in answers}

    def get(self, day: dt.date) -> Optional[DailyAnswer]:
        with self._lock:
            return self._by_date.get(day)

    def add(self, answer: DailyAnswer) -> DailyAnswer:
        with self._lock:
            if answer.date in self._by_date:
                raise DuplicateEntry(f"an answer already exists for {answer.date.isoformat()}")
            self._by_date[answer.date] = answer
        logger.info("daily answer stored for %s (#%d)", answer.date.isoformat(), answer.pokemon_id)
        return answer

    def get_or_create(self, day: dt.date, factory: Callable[[dt.date], DailyAnswer]) -> DailyAnswer:
        """Return the stored answer for `day`, creating it with `factory` on first use."""
        with self._lock:
            existing = self._by_date.get(day)
            if existing is not None:
                return existing
            answer = factory(day)
            self._by_date[day] = answer
        logger.info("daily answer stored for %s (#%d)", day.isoformat(), answer.pokemon_id)
        return answer

    def all(self) -> List[DailyAnswer]:
        with self._lock:
            return sorted(self._by_date.values(), key=lambda a: a.date)


class SessionStore:
    def __init__(self, sessions: Iterable[GameSession] = ()):
        self._lock = threading.Lock()
        self._sessions: Dict[SessionKey, GameSession] = {s.key: s for s in sessions}

    def get(self, player_id: str, answer_id: str) -> Optional[GameSession]:
        with self._lock:
            return self._sessions.get((player_id, answer_id))

    def create(self, session: GameSession) -> GameSession:
        with self._lock:
            if session.key in self._sessions:
                raise DuplicateEntry(
                    f"player {session.player_id!r} already has a game for {session.answer_id}"
                )
            self._sessions[session.key] = session
        return session

    def save(self, session: GameSession) -> None:
        with self._lock:
            self._sessions[session.key] = session

    def all(self) -> List[GameSession]:
        with self._lock:
            return list(self._sessions.values())


def rank_key(entry: LeaderboardEntry):
    """Fastest solve first, then fewer attempts, then earliest solve."""
    return (entry.solve_seconds, entry.attempts, entry.solved_at)


class LeaderboardStore:
    def __init__(self, entries: Iterable[LeaderboardEntry] = ()):
        self._lock = threading.Lock()
        self._entries: Dict[SessionKey, LeaderboardEntry] = {
            (e.player_id, e.answer_id): e for e in entries
        }

    def add(self, entry: LeaderboardEntry) -> LeaderboardEntry:
        key = (entry.player_id, entry.answer_id)
        with self._lock:
            if key in self._entries:
                raise DuplicateEntry(
                    f"player {entry.player_id!r} already has a leaderboard entry for {entry.answer_id}"
                )
            self._entries[key] = entry
        return entry

    def top(self, answer_id: str, limit: Optional[int] = 10) -> List[LeaderboardEntry]:
        with self._lock:
            rows = [e for e in self._entries.values() if e.answer_id == answer_id]
        rows.sort(key=rank_key)
        return rows if limit is None else rows[:limit]

    def all(self) -> List[LeaderboardEntry]:
        with self._lock:
            return list(self._entries.values())
