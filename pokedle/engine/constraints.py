"""
Candidate filtering given a session's guess history.

Given:
  - a pool of names (e.g., the bundled Pokémon list)
  - a history of (guess, pattern) pairs, pattern in the 'G'/'Y'/'-' form

Return:
  - names that are consistent with ALL feedback seen so far.

The CLI `hint` command uses this to tell a player how many Pokémon still fit.
"""

from typing import Iterable, List, Tuple

from .scoring import pattern, score
from .session import GameSession
from .validation import is_letters

# History is a sequence of (guess, pattern) tuples.
History = Iterable[Tuple[str, str]]


def history_of(session: GameSession) -> List[Tuple[str, str]]:
    """Extract (word, pattern) pairs from a session in attempt order."""
    return [(g.word, pattern(g.verdicts)) for g in session.guesses]


def filter_candidates(words: Iterable[str], history: History) -> List[str]:
    """
    Keep only names that would produce exactly the recorded pattern for
    every (guess, pattern) in `history`.

    Names are compared uppercase; names whose length differs from a guess
    or that hold anything but the letters A-Z are skipped.

    Returns:
      List[str] of consistent candidates (uppercase, order preserved).
    """
    history = list(history)
    out: List[str] = []

    for w in words:
        w = w.strip()
        if not is_letters(w):
            continue
        w = w.upper()

        consistent = True
        for g, patt in history:
            if len(g) != len(w) or pattern(score(g, w)) != patt:
                consistent = False
                break

        if consistent:
            out.append(w)

    return out
