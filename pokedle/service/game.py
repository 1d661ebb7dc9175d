"""
Game Service

Orchestrates the daily game on top of the engine:
- resolves (and stores) the Pokémon of the day
- starts or resumes a player's session for that day
- serializes guesses per session, applies the known-name policy, calls the
  engine, saves the session and records leaderboard entries on a win
- builds client-facing state that never leaks an active session's answer
"""

from __future__ import annotations

import datetime as dt
import logging
import threading
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from ..daily.picker import DEFAULT_SPRITE_URL, DailyAnswer, pick_for_date
from ..engine.errors import InvalidInput, PokedleError, UnknownName
from ..engine.session import (
    GameSession, GuessOutcome, LeaderboardEntry, letter_states, submit_guess,
)
from ..engine.validation import is_known_name, is_letters
from ..log import log_game_event
from ..store.memory import DailyAnswerStore, LeaderboardStore, SessionStore


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class GameService:
    """
    Daily game orchestration.

    Args:
      names        : canonical Pokémon names in national-dex order
      max_attempts : attempt budget per session
      sessions     : session store (in-memory by default)
      leaderboard  : leaderboard store
      answers      : daily answer store
      strict_names : reject guesses that are not in `names`
      sprite_url   : template with an `{id}` placeholder
      clock        : returns the current aware UTC datetime (injectable for tests)
    """

    def __init__(
            self,
            names: Sequence[str],
            *,
            max_attempts: int = 6,
            sessions: Optional[SessionStore] = None,
            leaderboard: Optional[LeaderboardStore] = None,
            answers: Optional[DailyAnswerStore] = None,
            strict_names: bool = True,
            sprite_url: str = DEFAULT_SPRITE_URL,
            clock: Callable[[], dt.datetime] = _utcnow,
    ):
        if not names:
            raise ValueError("GameService needs a non-empty name list")
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1; got {max_attempts}")
        self.names = [n.strip().lower() for n in names]
        self._known = {n.upper() for n in self.names}
        self.max_attempts = max_attempts
        self.sessions = sessions if sessions is not None else SessionStore()
        self.leaderboard_store = leaderboard if leaderboard is not None else LeaderboardStore()
        self.answers = answers if answers is not None else DailyAnswerStore()
        self.strict_names = strict_names
        self.sprite_url = sprite_url
        self.clock = clock

        # One lock per session key while someone holds or waits on it; guards
        # the load -> submit -> save sequence. Entries are [lock, users].
        self._locks_guard = threading.Lock()
        self._locks: Dict[tuple, list] = {}

    # -----------------------------
    # Daily answer
    # -----------------------------

    def _today(self) -> dt.date:
        return self.clock().date()

    def daily_answer(self, day: Optional[dt.date] = None) -> DailyAnswer:
        day = day or self._today()
        return self.answers.get_or_create(
            day, lambda d: pick_for_date(d, self.names, self.sprite_url)
        )

    # -----------------------------
    # Sessions
    # -----------------------------

    @contextmanager
    def _session_lock(self, key: tuple) -> Iterator[None]:
        with self._locks_guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]

    def start(self, player_id: str, day: Optional[dt.date] = None) -> GameSession:
        """Return the player's session for `day`, creating it on first play."""
        if not player_id:
            raise InvalidInput("player_id is required")
        answer = self.daily_answer(day)
        key = (player_id, answer.answer_id)
        with self._session_lock(key):
            session = self.sessions.get(*key)
            if session is None:
                session = GameSession.start(
                    player_id, answer.answer_id, answer.name, started_at=self.clock()
                )
                self.sessions.create(session)
                log_game_event("game_started", player_id=player_id, answer_id=answer.answer_id,
                               length=len(answer.name), max_attempts=self.max_attempts)
        return session

    def submit_guess(self, player_id: str, raw_guess: str,
                     day: Optional[dt.date] = None) -> GuessOutcome:
        """
        Submit one guess for the player's session on `day`.

        Raises:
          InvalidInput / UnknownName : malformed or unknown guess (session unchanged)
          SessionTerminal            : the day's game is already over
        """
        session = self.start(player_id, day)
        with self._session_lock(session.key):
            now = self.clock()
            elapsed = max(0, int((now - session.started_at).total_seconds()))
            try:
                self._check_known(raw_guess, session)
                outcome = submit_guess(session, raw_guess, self.max_attempts, elapsed, now=now)
            except PokedleError as e:
                log_game_event("guess_rejected", player_id=player_id,
                               answer_id=session.answer_id, level=logging.DEBUG,
                               error_type=type(e).__name__, error_message=str(e))
                raise
            self.sessions.save(session)

            log_game_event("guess_accepted", player_id=player_id, answer_id=session.answer_id,
                           attempt=outcome.guess.attempt, status=outcome.status.value)
            if outcome.leaderboard_entry is not None:
                self._record_win(outcome.leaderboard_entry)
            elif outcome.status.is_terminal:
                log_game_event("game_lost", player_id=player_id, answer_id=session.answer_id,
                               attempts=session.attempt_count)
        return outcome

    def _check_known(self, raw_guess: str, session: GameSession) -> None:
        if not self.strict_names or session.status.is_terminal or not isinstance(raw_guess, str):
            return
        word = raw_guess.strip()
        # Malformed input is left to the engine so its message wins.
        if (len(word) == len(session.answer) and is_letters(word)
                and not is_known_name(word, self._known)):
            raise UnknownName(f"{word.upper()} is not a known Pokémon")

    def _record_win(self, entry: LeaderboardEntry) -> None:
        self.leaderboard_store.add(entry)
        log_game_event("game_won", player_id=entry.player_id, answer_id=entry.answer_id,
                       attempts=entry.attempts, solve_seconds=entry.solve_seconds)

    # -----------------------------
    # Views
    # -----------------------------

    def state(self, player_id: str, day: Optional[dt.date] = None) -> Dict:
        """
        JSON-ready view of the player's session (started on first call).
        The answer and its Pokémon metadata are only included once the
        session is over.
        """
        session = self.start(player_id, day)
        answer = self.daily_answer(day)
        over = session.status.is_terminal
        return {
            "answer_id": session.answer_id,
            "length": len(session.answer),
            "status": session.status.value,
            "attempt_count": session.attempt_count,
            "max_attempts": self.max_attempts,
            "won": session.won,
            "solve_seconds": session.solve_seconds,
            "guesses": [g.to_dict() for g in session.guesses],
            "letter_states": letter_states(session),
            "answer": answer.to_dict() if over else None,
        }

    def leaderboard(self, day: Optional[dt.date] = None, limit: Optional[int] = 10) -> List[LeaderboardEntry]:
        return self.leaderboard_store.top(self.daily_answer(day).answer_id, limit)
