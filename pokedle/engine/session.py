"""
Game session state machine.

One GameSession = one player playing one daily answer.

States:
  ACTIVE --(all-Correct guess)--> WON
  ACTIVE --(attempts exhausted)--> LOST
WON and LOST are terminal: no further guesses are accepted.

`submit_guess` is the only mutator. It validates everything first, so it
either appends exactly one Guess and updates status consistently, or raises
and leaves the session untouched. It performs no I/O; persisting the session
and the leaderboard entry is the caller's job.

Callers must not run two `submit_guess` calls on the same session at once
(the game service holds one lock per session for this).
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .errors import InvalidInput, SessionTerminal
from .scoring import LetterStatus, LetterVerdict, is_solved, score
from .validation import validate_answer, validate_guess


class GameStatus(Enum):
    ACTIVE = "Active"
    WON = "Won"
    LOST = "Lost"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.ACTIVE


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def _iso(ts: Optional[dt.datetime]) -> Optional[str]:
    return ts.isoformat() if ts else None


def _parse_ts(s: Optional[str]) -> Optional[dt.datetime]:
    return dt.datetime.fromisoformat(s) if s else None


@dataclass(frozen=True)
class Guess:
    """One accepted attempt. Immutable once created."""
    raw: str                        # text as the player typed it
    word: str                       # normalized (uppercase) guess
    attempt: int                    # 1-based attempt number
    verdicts: tuple                 # tuple[LetterVerdict, ...]
    guessed_at: dt.datetime

    @property
    def solved(self) -> bool:
        return is_solved(self.verdicts)

    def to_dict(self) -> Dict:
        return {
            "raw": self.raw,
            "word": self.word,
            "attempt": self.attempt,
            "verdicts": [v.to_dict() for v in self.verdicts],
            "guessed_at": _iso(self.guessed_at),
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "Guess":
        return cls(
            raw=d["raw"],
            word=d["word"],
            attempt=int(d["attempt"]),
            verdicts=tuple(LetterVerdict.from_dict(v) for v in d["verdicts"]),
            guessed_at=_parse_ts(d["guessed_at"]),
        )


@dataclass(frozen=True)
class LeaderboardEntry:
    """Emitted on the ACTIVE -> WON transition; stored by the caller."""
    player_id: str
    answer_id: str
    solve_seconds: float
    attempts: int
    solved_at: dt.datetime

    def to_dict(self) -> Dict:
        return {
            "player_id": self.player_id,
            "answer_id": self.answer_id,
            "solve_seconds": self.solve_seconds,
            "attempts": self.attempts,
            "solved_at": _iso(self.solved_at),
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "LeaderboardEntry":
        return cls(
            player_id=d["player_id"],
            answer_id=d["answer_id"],
            solve_seconds=d["solve_seconds"],
            attempts=int(d["attempts"]),
            solved_at=_parse_ts(d["solved_at"]),
        )


@dataclass(frozen=True)
class GuessOutcome:
    """
    What one successful `submit_guess` call produced.

    `answer` is only filled once the session is terminal, so a caller can
    reveal it on a loss without ever reading it off an active session.
    """
    guess: Guess
    status: GameStatus
    leaderboard_entry: Optional[LeaderboardEntry] = None
    answer: Optional[str] = None


@dataclass
class GameSession:
    player_id: str
    answer_id: str
    answer: str
    status: GameStatus = GameStatus.ACTIVE
    guesses: List[Guess] = field(default_factory=list)
    won: bool = False
    solve_seconds: Optional[float] = None
    started_at: dt.datetime = field(default_factory=_utcnow)
    completed_at: Optional[dt.datetime] = None

    @classmethod
    def start(cls, player_id: str, answer_id: str, answer: str,
              started_at: Optional[dt.datetime] = None) -> "GameSession":
        """Create a fresh ACTIVE session bound to `answer` (canonicalized to uppercase)."""
        if not player_id:
            raise InvalidInput("player_id is required")
        return cls(
            player_id=str(player_id),
            answer_id=str(answer_id),
            answer=validate_answer(answer),
            started_at=started_at or _utcnow(),
        )

    @property
    def attempt_count(self) -> int:
        # Derived, so it can never drift from the guess list.
        return len(self.guesses)

    @property
    def key(self) -> tuple:
        return (self.player_id, self.answer_id)

    def to_dict(self) -> Dict:
        return {
            "player_id": self.player_id,
            "answer_id": self.answer_id,
            "answer": self.answer,
            "status": self.status.value,
            "guesses": [g.to_dict() for g in self.guesses],
            "won": self.won,
            "solve_seconds": self.solve_seconds,
            "started_at": _iso(self.started_at),
            "completed_at": _iso(self.completed_at),
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "GameSession":
        return cls(
            player_id=d["player_id"],
            answer_id=d["answer_id"],
            answer=validate_answer(d["answer"]),
            status=GameStatus(d["status"]),
            guesses=[Guess.from_dict(g) for g in d.get("guesses", [])],
            won=bool(d.get("won", False)),
            solve_seconds=d.get("solve_seconds"),
            started_at=_parse_ts(d["started_at"]),
            completed_at=_parse_ts(d.get("completed_at")),
        )


def submit_guess(
        session: GameSession,
        raw_guess: str,
        max_attempts: int,
        elapsed_seconds: float,
        *,
        now: Optional[dt.datetime] = None,
) -> GuessOutcome:
    """
    Apply one guess to `session`.

    Args:
      session         : the session to advance (mutated in place on success)
      raw_guess       : text as typed; trimmed and upper-cased here
      max_attempts    : attempt budget (e.g. 6); reaching it without a win loses
      elapsed_seconds : time since the session started, recorded verbatim on a win
      now             : timestamp for the Guess (defaults to current UTC time)

    Raises:
      SessionTerminal : session is already WON or LOST
      InvalidInput    : malformed guess, max_attempts < 1, or negative elapsed time
    """
    if session.status.is_terminal:
        raise SessionTerminal(f"Game is already over ({session.status.value})")
    if max_attempts < 1:
        raise InvalidInput(f"max_attempts must be at least 1; got {max_attempts}")
    if elapsed_seconds is None or elapsed_seconds < 0:
        raise InvalidInput(f"elapsed_seconds must be non-negative; got {elapsed_seconds}")

    word = validate_guess(raw_guess, len(session.answer))
    verdicts = tuple(score(word, session.answer))
    ts = now or _utcnow()

    # No failure is possible past this point.
    guess = Guess(
        raw=raw_guess,
        word=word,
        attempt=session.attempt_count + 1,
        verdicts=verdicts,
        guessed_at=ts,
    )
    session.guesses.append(guess)

    entry = None
    if guess.solved:
        session.status = GameStatus.WON
        session.won = True
        session.solve_seconds = elapsed_seconds
        session.completed_at = ts
        entry = LeaderboardEntry(
            player_id=session.player_id,
            answer_id=session.answer_id,
            solve_seconds=elapsed_seconds,
            attempts=session.attempt_count,
            solved_at=ts,
        )
    elif session.attempt_count >= max_attempts:
        session.status = GameStatus.LOST
        session.completed_at = ts

    return GuessOutcome(
        guess=guess,
        status=session.status,
        leaderboard_entry=entry,
        answer=session.answer if session.status.is_terminal else None,
    )


# Promotion order for the keyboard map: a letter only ever moves up.
_RANK = {
    "unused": 0,
    LetterStatus.NOT_IN_WORD.value: 1,
    LetterStatus.WRONG_POSITION.value: 2,
    LetterStatus.CORRECT.value: 3,
}


def letter_states(session: GameSession) -> Dict[str, str]:
    """
    Map every letter A–Z to the best status it has shown in this session:
    Correct > WrongPosition > NotInWord > "unused".
    """
    states = {ch: "unused" for ch in "ABCDEFGHIJKLMNOPQRSTUVWXYZ"}
    for g in session.guesses:
        for v in g.verdicts:
            if _RANK[v.status.value] > _RANK[states[v.letter]]:
                states[v.letter] = v.status.value
    return states
