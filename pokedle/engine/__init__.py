from .errors import PokedleError, InvalidInput, SessionTerminal, DuplicateEntry, UnknownName
from .scoring import LetterStatus, LetterVerdict, score, pattern, is_solved
from .validation import is_letters, validate_guess, validate_answer, is_known_name
from .session import (
    GameStatus, Guess, GameSession, GuessOutcome, LeaderboardEntry, submit_guess, letter_states,
)
from .constraints import filter_candidates, history_of

__all__ = [
    "PokedleError", "InvalidInput", "SessionTerminal", "DuplicateEntry", "UnknownName",
    "LetterStatus", "LetterVerdict", "score", "pattern", "is_solved",
    "is_letters", "validate_guess", "validate_answer", "is_known_name",
    "GameStatus", "Guess", "GameSession", "GuessOutcome", "LeaderboardEntry",
    "submit_guess", "letter_states",
    "filter_candidates", "history_of",
]
