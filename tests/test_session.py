import datetime as dt

import pytest
from pokedle.engine import (
    GameSession, GameStatus, InvalidInput, LetterStatus, SessionTerminal, letter_states,
    submit_guess,
)

WRONG_SEVENS = ["METAPOD", "RATTATA", "SPEAROW", "PIDGEOT", "PERSIAN", "PSYDUCK"]


def _session(answer="PIKACHU"):
    return GameSession.start("ash", "2026-01-01", answer)


def test_new_session_is_active():
    s = _session("pikachu")
    assert s.status is GameStatus.ACTIVE
    assert s.answer == "PIKACHU"
    assert s.attempt_count == 0
    assert s.won is False and s.solve_seconds is None


def test_six_misses_lose():
    s = _session()
    for i, g in enumerate(WRONG_SEVENS, 1):
        out = submit_guess(s, g, max_attempts=6, elapsed_seconds=i * 10)
        assert out.guess.attempt == i
    assert s.status is GameStatus.LOST
    assert s.attempt_count == 6
    assert s.won is False and s.solve_seconds is None
    assert out.status is GameStatus.LOST
    assert out.answer == "PIKACHU"
    assert out.leaderboard_entry is None
    assert s.completed_at is not None


def test_first_guess_wins():
    s = _session()
    out = submit_guess(s, "PIKACHU", max_attempts=6, elapsed_seconds=42)
    assert s.status is GameStatus.WON
    assert s.attempt_count == 1
    assert s.won is True
    assert s.solve_seconds == 42
    entry = out.leaderboard_entry
    assert entry is not None
    assert (entry.player_id, entry.answer_id, entry.solve_seconds, entry.attempts) == (
        "ash", "2026-01-01", 42, 1)
    assert out.answer == "PIKACHU"


def test_win_on_last_attempt_is_won_not_lost():
    s = _session()
    for g in WRONG_SEVENS[:5]:
        submit_guess(s, g, 6, 1)
    out = submit_guess(s, "pikachu", 6, 77)
    assert out.status is GameStatus.WON
    assert out.leaderboard_entry.attempts == 6


def test_active_outcome_hides_answer():
    s = _session()
    out = submit_guess(s, "RATTATA", 6, 3)
    assert out.status is GameStatus.ACTIVE
    assert out.answer is None


def test_guess_is_trimmed_and_uppercased():
    s = _session()
    out = submit_guess(s, "  pikachu ", 6, 5)
    assert out.guess.raw == "  pikachu "
    assert out.guess.word == "PIKACHU"
    assert out.status is GameStatus.WON


def test_guesses_keep_submission_order():
    s = _session()
    for g in WRONG_SEVENS[:3]:
        submit_guess(s, g, 6, 1)
    assert [g.word for g in s.guesses] == WRONG_SEVENS[:3]
    assert [g.attempt for g in s.guesses] == [1, 2, 3]


@pytest.mark.parametrize("status_guesses", [["PIKACHU"], WRONG_SEVENS])
def test_terminal_session_rejects_and_is_unchanged(status_guesses):
    s = _session()
    for g in status_guesses:
        submit_guess(s, g, 6, 9)
    before = s.to_dict()
    with pytest.raises(SessionTerminal):
        submit_guess(s, "PIKACHU", 6, 100)
    assert s.to_dict() == before


@pytest.mark.parametrize("raw", ["", "   ", "PIKA", "PIKACHUU", "PIKA-HU", "P1KACHU", None])
def test_invalid_guess_leaves_session_unchanged(raw):
    s = _session()
    submit_guess(s, "RATTATA", 6, 1)
    before = s.to_dict()
    with pytest.raises(InvalidInput):
        submit_guess(s, raw, 6, 2)
    assert s.to_dict() == before


def test_guess_that_grows_when_uppercased_is_rejected():
    s = _session("PIKASSU")
    with pytest.raises(InvalidInput):
        submit_guess(s, "pikaßu", 6, 1)
    assert s.attempt_count == 0
    assert s.status is GameStatus.ACTIVE


def test_bad_limits_rejected():
    s = _session()
    with pytest.raises(InvalidInput):
        submit_guess(s, "PIKACHU", 0, 1)
    with pytest.raises(InvalidInput):
        submit_guess(s, "PIKACHU", 6, -1)
    assert s.attempt_count == 0


def test_single_attempt_budget():
    s = _session()
    submit_guess(s, "RATTATA", 1, 1)
    assert s.status is GameStatus.LOST


def test_all_correct_iff_won():
    s = _session()
    for g in WRONG_SEVENS[:4] + ["PIKACHU"]:
        out = submit_guess(s, g, 6, 1)
        assert (out.status is GameStatus.WON) == out.guess.solved
    assert sum(g.solved for g in s.guesses) == 1


def test_start_rejects_bad_answer_and_player():
    with pytest.raises(InvalidInput):
        GameSession.start("ash", "2026-01-01", "MR-MIME")
    with pytest.raises(InvalidInput):
        GameSession.start("ash", "2026-01-01", "")
    with pytest.raises(InvalidInput):
        GameSession.start("", "2026-01-01", "PIKACHU")


def test_letter_states_promote_only_upward():
    s = GameSession.start("ash", "d", "ABBEY")
    submit_guess(s, "BXXXX", 6, 1)   # B yellow
    submit_guess(s, "XBXXX", 6, 1)   # B green
    submit_guess(s, "XXXXB", 6, 1)   # B would be yellow again
    states = letter_states(s)
    assert states["B"] == LetterStatus.CORRECT.value
    assert states["X"] == LetterStatus.NOT_IN_WORD.value
    assert states["Z"] == "unused"


def test_session_dict_round_trip():
    s = _session()
    ts = dt.datetime(2026, 1, 1, 12, 0, tzinfo=dt.timezone.utc)
    submit_guess(s, "RATTATA", 6, 1, now=ts)
    submit_guess(s, "PIKACHU", 6, 30, now=ts)
    restored = GameSession.from_dict(s.to_dict())
    assert restored == s
    assert restored.guesses[0].guessed_at == ts
