from __future__ import annotations
import re
import unicodedata
from pathlib import Path
from typing import Iterable, List

DEFAULT_NAMES_PATH = Path(__file__).parent / "data" / "pokemon_names.txt"

_NON_LETTERS_RE = re.compile(r"[^a-z]")


def read_lines(p: Path | str) -> List[str]:
    """
    Read a UTF-8 text file into a list of lines, stripping trailing CR/LF.
    Raises FileNotFoundError if the path doesn't exist.
    """
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(p)
    return [ln.rstrip("\r\n") for ln in p.read_text(encoding="utf-8").splitlines()]


def write_lines(lines: Iterable[str], p: Path | str) -> str:
    """
    Write lines to a UTF-8 text file, ensuring a trailing newline.
    Returns the string path written.
    """
    p = Path(p)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(p)


def canonical_name(name: str) -> str:
    """
    Fold a catalog name into the guessable form: accents stripped, lowercase,
    letters only. "Mr. Mime" -> "mrmime", "flabébé" -> "flabebe", "ho-oh" -> "hooh".
    """
    folded = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    return _NON_LETTERS_RE.sub("", folded.lower())


def load_names(p: Path | str = DEFAULT_NAMES_PATH) -> List[str]:
    """
    Load a name list (one per line), canonicalize, drop blanks.
    Order is preserved; it doubles as the national-dex numbering.
    """
    return [w for w in (canonical_name(ln) for ln in read_lines(p)) if w]
