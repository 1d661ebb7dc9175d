# apps/cli/play.py
"""
CLI entry point for playing the Pokémon of the day in a terminal.

This script:
  1) Validates the names list (prints counts + SHA).
  2) Loads saved state (answers, sessions, leaderboard) from the JSON state file.
  3) Resumes or starts the player's game for the day and reads guesses until
     the game is won, lost, or the player quits. Every accepted guess is saved.
  4) Prints the day's leaderboard when the game is over (optionally as CSV).

Commands at the prompt:
  hint (h)  how many known Pokémon still fit the feedback so far
  quit (q)  leave; the game resumes on the next run
"""

from __future__ import annotations

import argparse
import datetime as dt
import sys
from pathlib import Path

from pokedle.config import Config
from pokedle.datasets import load_names, pretty_summary, validate_namelist
from pokedle.engine import (
    GameStatus, PokedleError, filter_candidates, history_of, pattern,
)
from pokedle.log import configure_logging
from pokedle.service import GameService
from pokedle.store import load_state, save_state, timestamp_id, write_leaderboard_csv


def _render_guess(word: str, patt: str) -> str:
    """
    Two aligned rows: the letters, then their verdict marks.
      P I K A C H U
      G G - Y - - G
    """
    return " ".join(word) + "\n" + " ".join(patt)


def _positive_int(text: str) -> int:
    n = int(text)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1; got {n}")
    return n


def _print_leaderboard(svc: GameService, day: dt.date, limit: int) -> None:
    rows = svc.leaderboard(day, limit=limit)
    if not rows:
        print("Leaderboard: no solves yet.")
        return
    print("Leaderboard:")
    for rank, e in enumerate(rows, 1):
        print(f"  {rank:>2}. {e.player_id:<16} {e.solve_seconds:>6}s  {e.attempts} tries")


def main(argv: list[str] | None = None) -> int:
    """
    Parse CLI args, restore state, run the prompt loop, persist after each guess.
    """
    ap = argparse.ArgumentParser(description="pokedle: guess the Pokémon of the day")
    ap.add_argument("--player", required=True, help="player id (any non-empty string)")
    ap.add_argument("--names", default=Config.NAMES_PATH, help="path to names list")
    ap.add_argument("--state", default=Config.STATE_PATH, help="JSON state file")
    ap.add_argument("--max-attempts", type=_positive_int, default=Config.MAX_ATTEMPTS,
                    help="guesses allowed per game")
    ap.add_argument("--date", type=dt.date.fromisoformat,
                    help="play the puzzle for this UTC date (YYYY-MM-DD) instead of today")
    ap.add_argument("--lenient", action="store_true",
                    help="accept any well-formed guess, not only known Pokémon names")
    ap.add_argument("--top", type=int, default=10, help="leaderboard rows to show")
    ap.add_argument("--export-csv", metavar="DIR",
                    help="write the day's leaderboard to DIR/leaderboard_<timestamp>.csv")
    ap.add_argument("--log-level", default=Config.LOG_LEVEL)
    ap.add_argument("--log-file", help="also append log records to this file")
    args = ap.parse_args(argv)

    configure_logging(args.log_level, args.log_file)

    # 1) Validate the names list and print a one-liner summary
    rep = validate_namelist(args.names)
    print(pretty_summary(rep))
    names = load_names(args.names)
    if not names:
        print("No usable names found; fix the names list first.", file=sys.stderr)
        return 2

    # 2) Restore stores and build the service
    stores = load_state(args.state)
    try:
        svc = GameService(
            names,
            max_attempts=args.max_attempts,
            sessions=stores["sessions"],
            leaderboard=stores["leaderboard"],
            answers=stores["answers"],
            strict_names=Config.STRICT_NAMES and not args.lenient,
            sprite_url=Config.SPRITE_URL,
        )
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2

    def persist() -> None:
        save_state(args.state, answers=svc.answers, sessions=svc.sessions,
                   leaderboard=svc.leaderboard_store)

    # 3) Resume or start the day's game; the day is fixed for the whole run
    day = args.date or svc.daily_answer().date
    session = svc.start(args.player, day)
    persist()
    n = len(session.answer)
    print(f"Pokémon of {session.answer_id}: {n} letters, {svc.max_attempts} tries. "
          f"Type 'hint' or 'quit'.")
    for g in session.guesses:
        print(_render_guess(g.word, pattern(g.verdicts)))

    while not session.status.is_terminal:
        try:
            raw = input(f"Guess {session.attempt_count + 1}/{svc.max_attempts}: ")
        except EOFError:
            print()
            return 0
        cmd = raw.strip().lower()
        if cmd in ("quit", "q"):
            print("Saved. Come back later to finish today's game.")
            return 0
        if cmd in ("hint", "h"):
            left = filter_candidates(svc.names, history_of(session))
            left = [w for w in left if len(w) == n]
            print(f"Hint: {len(left)} known Pokémon still fit.")
            continue

        try:
            outcome = svc.submit_guess(args.player, raw, day)
        except PokedleError as e:
            print(e)
            continue
        persist()
        print(_render_guess(outcome.guess.word, pattern(outcome.guess.verdicts)))

    # 4) Game over: reveal and rank
    answer = svc.daily_answer(day)
    if session.status is GameStatus.WON:
        tries = "try" if session.attempt_count == 1 else "tries"
        print(f"Correct! {answer.name} in {session.attempt_count} {tries}, "
              f"{session.solve_seconds}s.")
    else:
        print(f"Out of tries. The Pokémon was {answer.name}.")
    print(f"#{answer.pokemon_id} {answer.image_url}")
    _print_leaderboard(svc, day, args.top)

    if args.export_csv:
        out = Path(args.export_csv) / f"leaderboard_{timestamp_id()}.csv"
        write_leaderboard_csv(svc.leaderboard(day, limit=None), str(out))
        print(f"Wrote: {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
