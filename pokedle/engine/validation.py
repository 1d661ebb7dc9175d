"""
Guess validation and normalization.

This module answers the question: "Is this guess acceptable right now?"
A guess is valid iff, after trimming:
  - it is a non-empty string
  - it contains only the ASCII letters A–Z/a-z (punctuation, digits, spaces
    and other scripts are rejected)
  - it has exactly the answer's length
The canonical form is uppercase. Length and letters are checked on the raw
text, before upper-casing ("ß" upper-cases to "SS").

Dictionary membership ("is this a real Pokémon?") is a policy of the game
service, not of the engine; see `is_known_name`.
"""

import re
from typing import Iterable

from .errors import InvalidInput

LETTERS_RE = re.compile(r"[A-Za-z]+")


def is_letters(word: str) -> bool:
    """True iff `word` is a non-empty run of ASCII letters."""
    return LETTERS_RE.fullmatch(word) is not None


def validate_guess(raw: str, length: int) -> str:
    """
    Check `raw` against the rules above and return its canonical form.

    Returns:
      the canonical (uppercase) guess

    Raises:
      InvalidInput with a message fit to show the player.
    """
    if not isinstance(raw, str):
        raise InvalidInput("Guess must be a string")
    w = raw.strip()
    if not w:
        raise InvalidInput("Guess cannot be empty")
    if not is_letters(w):
        raise InvalidInput("Guess must contain only letters A-Z")
    if len(w) != length:
        raise InvalidInput(f"Guess must be {length} letters long")
    return w.upper()


def validate_answer(answer: str) -> str:
    """Canonicalize an answer word; it must be a non-empty run of A–Z."""
    if not isinstance(answer, str) or not is_letters(answer.strip()):
        raise InvalidInput(f"Answer word must be letters A-Z only; got {answer!r}")
    return answer.strip().upper()


def is_known_name(word: str, names: Iterable[str]) -> bool:
    """
    Case-insensitive membership check.

    Notes:
      - Builds a set on every call; pass a prebuilt set of UPPERCASE names
        for repeated checks.
    """
    known = names if isinstance(names, (set, frozenset)) else {n.strip().upper() for n in names}
    return word.strip().upper() in known
