"""
Dataset validator for the Pokémon name list.

What this module does:
- Validate a names file (one canonical name per line, national-dex order).
- Enforce formatting rules (lowercase, a–z only, length within [min_len, max_len]).
- Detect duplicates and invalid lines; compute SHA-256 of the raw file.
- Return a machine-readable dict and provide a pretty one-line summary.

Typical use:
    from pokedle.datasets import validate_namelist, pretty_summary
    rep = validate_namelist("pokedle/datasets/data/pokemon_names.txt")
    print(pretty_summary(rep))
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List, Tuple
import hashlib


# -----------------------------
# Dataclasses for structured reports
# -----------------------------

@dataclass
class FileReport:
    """Per-file diagnostics and metadata."""
    path: str            # file path (as given)
    exists: bool         # did the file exist on disk?
    count: int           # number of VALID names after cleaning
    sha256: str          # SHA-256 of raw file bytes (empty string if missing)
    unique_count: int    # unique valid names (after dedupe)
    invalid_lines: int   # number of invalid lines encountered


@dataclass
class ValidationReport:
    """Top-level validation result for a names file."""
    min_len: int
    max_len: int
    names: FileReport
    passed: bool
    issues: List[str]    # human-friendly list of problems (if any)


# -----------------------------
# Helpers
# -----------------------------

def _sha256_file(path: Path) -> str:
    """Compute SHA-256 of a file's raw bytes."""
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _load_and_check(path: Path, min_len: int, max_len: int) -> Tuple[List[str], int]:
    """
    Load names from a text file and validate them.

    Rules:
      - one name per line
      - must be lowercase a–z
      - length within [min_len, max_len]
      - empty/whitespace-only lines are INVALID

    Returns:
      (valid_names, invalid_count)
    """
    valid: List[str] = []
    invalid = 0

    with path.open("r", encoding="utf-8") as f:
        for raw in f:
            w = raw.strip()
            if not w:
                invalid += 1
                continue
            if w.isascii() and w.islower() and w.isalpha() and min_len <= len(w) <= max_len:
                valid.append(w)
            else:
                invalid += 1

    return valid, invalid


# -----------------------------
# Public API
# -----------------------------

def validate_namelist(path: str, min_len: int = 3, max_len: int = 12) -> Dict:
    """
    Validate a Pokémon names file.

    Returns
    -------
    Dict
        A JSON-serializable dictionary (see ValidationReport schema) with
        counts, SHA-256, a strict `passed` flag (non-empty, no invalid lines,
        no duplicates) and `issues` describing any problems.
    """
    issues: List[str] = []
    p = Path(path)

    if not p.exists():
        issues.append(f"names file not found: {path}")
        rep = ValidationReport(
            min_len=min_len,
            max_len=max_len,
            names=FileReport(path, False, 0, "", 0, 0),
            passed=False,
            issues=issues,
        )
        return asdict(rep)

    names, invalid = _load_and_check(p, min_len, max_len)
    report = FileReport(
        path=str(p),
        exists=True,
        count=len(names),
        sha256=_sha256_file(p),
        unique_count=len(set(names)),
        invalid_lines=invalid,
    )

    if report.count == 0:
        issues.append("names file contains 0 valid names")
    if invalid:
        issues.append(f"names has {invalid} invalid line(s)")
    if report.count != report.unique_count:
        issues.append("names contains duplicate lines")

    passed = report.count > 0 and invalid == 0 and report.count == report.unique_count

    rep = ValidationReport(
        min_len=min_len,
        max_len=max_len,
        names=report,
        passed=passed,
        issues=issues,
    )
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    Produce a compact, human-friendly one-liner for console/docs.

    Example:
        names=151 (uniq=151, sha=abc123...) | len=3..12 | OK
    """
    n = report["names"]
    status = "OK" if report["passed"] else "FAIL"
    sha = (n.get("sha256") or "")[:12]
    return (
        f"names={n['count']} (uniq={n['unique_count']}, sha={sha}) "
        f"| len={report['min_len']}..{report['max_len']} | {status}"
    )
