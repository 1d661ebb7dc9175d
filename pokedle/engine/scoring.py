"""
Wordle-style scoring (feedback) for a single (guess, answer) pair.

Conventions:
  - Correct       : green  = letter in the correct position
  - WrongPosition : yellow = letter in the answer, but elsewhere
  - NotInWord     : gray   = letter not present (or present fewer times than guessed)

Compact pattern form (used by the CLI and the candidate filter):
  'G' = Correct, 'Y' = WrongPosition, '-' = NotInWord

Algorithm (two-pass, duplicate-safe):
  1) Pass 1 marks every exact match and consumes that answer position.
  2) Pass 2 walks the remaining guess positions left to right; a letter is
     WrongPosition only if an unconsumed answer position still holds it, and
     the first such position (in answer order) is consumed.

Consumption is tracked with one boolean flag per answer position, so the
number of non-gray verdicts for a letter never exceeds its count in the answer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

from .errors import InvalidInput


class LetterStatus(Enum):
    """Per-letter verdict."""
    CORRECT = "Correct"
    WRONG_POSITION = "WrongPosition"
    NOT_IN_WORD = "NotInWord"


PATTERN_CHARS = {
    LetterStatus.CORRECT: "G",
    LetterStatus.WRONG_POSITION: "Y",
    LetterStatus.NOT_IN_WORD: "-",
}


@dataclass(frozen=True)
class LetterVerdict:
    letter: str
    status: LetterStatus

    def to_dict(self) -> dict:
        return {"letter": self.letter, "status": self.status.value}

    @classmethod
    def from_dict(cls, d: dict) -> "LetterVerdict":
        return cls(letter=d["letter"], status=LetterStatus(d["status"]))


def score(guess: str, answer: str) -> List[LetterVerdict]:
    """
    Compute per-letter feedback for `guess` against `answer`.

    Preconditions:
      - both are non-empty strings
      - len(guess) == len(answer)

    Raises:
      InvalidInput if a precondition does not hold.

    Examples:
      pattern(score("SPEED", "ERASE")) -> "Y-YY-"
      pattern(score("ABBEY", "SWEET")) -> "---G-"
    """
    if not isinstance(guess, str) or not isinstance(answer, str):
        raise InvalidInput("Guess and answer must be strings")
    if not guess or not answer:
        raise InvalidInput("Guess and answer cannot be empty")

    # Lengths are compared before upper-casing, which can grow a word
    if len(guess) != len(answer):
        raise InvalidInput(
            f"Guess must be {len(answer)} letters long; got {len(guess)}"
        )
    # Case-insensitive; canonical form is uppercase
    guess = guess.upper()
    answer = answer.upper()
    if len(guess) != len(answer):
        raise InvalidInput("Guess and answer must stay the same length when upper-cased")

    n = len(guess)
    statuses = [LetterStatus.NOT_IN_WORD] * n
    consumed = [False] * n

    # Pass 1: exact matches consume their answer position first,
    # otherwise a later yellow could steal a letter a green needs.
    for i in range(n):
        if guess[i] == answer[i]:
            statuses[i] = LetterStatus.CORRECT
            consumed[i] = True

    # Pass 2: displaced matches against unconsumed positions only.
    for i in range(n):
        if statuses[i] is LetterStatus.CORRECT:
            continue
        for j in range(n):
            if not consumed[j] and answer[j] == guess[i]:
                statuses[i] = LetterStatus.WRONG_POSITION
                consumed[j] = True
                break
        # else: stays NotInWord

    return [LetterVerdict(letter, status) for letter, status in zip(guess, statuses)]


def pattern(verdicts: Sequence[LetterVerdict]) -> str:
    """Render verdicts as a 'G'/'Y'/'-' string, e.g. "GG-Y-"."""
    return "".join(PATTERN_CHARS[v.status] for v in verdicts)


def is_solved(verdicts: Sequence[LetterVerdict]) -> bool:
    """True iff there is at least one verdict and every verdict is Correct."""
    return bool(verdicts) and all(v.status is LetterStatus.CORRECT for v in verdicts)
