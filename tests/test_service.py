import datetime as dt
import json
import logging
import threading

import pytest
from pokedle.daily import DailyAnswer
from pokedle.engine import GameStatus, InvalidInput, SessionTerminal, UnknownName
from pokedle.service import GameService
from pokedle.store import DailyAnswerStore

DAY = dt.date(2026, 1, 1)
NAMES = ["pikachu", "raichu", "metapod", "rattata", "spearow", "pidgeot", "persian",
         "psyduck", "golduck", "machoke"]
WRONG = ["METAPOD", "RATTATA", "SPEAROW", "PIDGEOT", "PERSIAN", "PSYDUCK"]


class FakeClock:
    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += dt.timedelta(seconds=seconds)


@pytest.fixture()
def clock():
    return FakeClock(dt.datetime(2026, 1, 1, 8, 0, tzinfo=dt.timezone.utc))


@pytest.fixture()
def svc(clock):
    answers = DailyAnswerStore([DailyAnswer(DAY, 25, "PIKACHU", "https://img/25.png")])
    return GameService(NAMES, max_attempts=6, answers=answers, clock=clock)


def test_start_is_idempotent(svc):
    a = svc.start("ash")
    b = svc.start("ash")
    assert a is b
    assert a.answer_id == "2026-01-01"


def test_win_records_elapsed_and_leaderboard(svc, clock):
    svc.start("ash")
    clock.advance(90)
    out = svc.submit_guess("ash", "pikachu")
    assert out.status is GameStatus.WON
    assert out.guess.attempt == 1
    session = svc.start("ash")
    assert session.solve_seconds == 90
    board = svc.leaderboard()
    assert [(e.player_id, e.solve_seconds, e.attempts) for e in board] == [("ash", 90, 1)]


def test_loss_reveals_answer_and_skips_leaderboard(svc):
    for g in WRONG:
        out = svc.submit_guess("misty", g)
    assert out.status is GameStatus.LOST
    assert out.answer == "PIKACHU"
    assert svc.leaderboard() == []
    with pytest.raises(SessionTerminal):
        svc.submit_guess("misty", "PIKACHU")
    assert svc.start("misty").attempt_count == 6


def test_unknown_name_rejected_when_strict(svc):
    with pytest.raises(UnknownName):
        svc.submit_guess("ash", "ABCDEFG")
    assert svc.start("ash").attempt_count == 0


def test_malformed_guess_reports_engine_error(svc):
    with pytest.raises(InvalidInput) as exc:
        svc.submit_guess("ash", "PIKA")
    assert not isinstance(exc.value, UnknownName)


def test_lenient_accepts_any_word(clock):
    answers = DailyAnswerStore([DailyAnswer(DAY, 25, "PIKACHU", "https://img/25.png")])
    svc = GameService(NAMES, answers=answers, strict_names=False, clock=clock)
    out = svc.submit_guess("ash", "ABCDEFG")
    assert out.status is GameStatus.ACTIVE


def test_state_hides_answer_until_over(svc):
    st = svc.state("ash")
    assert st["status"] == "Active"
    assert st["length"] == 7
    assert st["answer"] is None
    svc.submit_guess("ash", "PIKACHU")
    st = svc.state("ash")
    assert st["status"] == "Won"
    assert st["answer"]["name"] == "PIKACHU"
    assert st["letter_states"]["P"] == "Correct"


def test_players_are_independent_and_ranked(svc, clock):
    svc.start("ash")
    svc.start("brock")
    clock.advance(40)
    svc.submit_guess("brock", "PIKACHU")
    clock.advance(20)
    svc.submit_guess("ash", "PIKACHU")
    assert [e.player_id for e in svc.leaderboard()] == ["brock", "ash"]


def test_daily_answer_picked_and_stored_once(clock):
    svc = GameService(NAMES, clock=clock)
    first = svc.daily_answer()
    assert first.name.lower() in NAMES
    assert svc.daily_answer() is first
    assert svc.answers.get(DAY) is first


def test_new_day_new_session(svc, clock):
    svc.submit_guess("ash", "PIKACHU")
    clock.advance(24 * 3600)
    s = svc.start("ash")
    assert s.answer_id == "2026-01-02"
    assert s.status is GameStatus.ACTIVE


def test_concurrent_guesses_get_distinct_attempts(svc):
    svc.start("ash")
    barrier = threading.Barrier(len(WRONG))
    errors = []

    def play(word):
        barrier.wait()
        try:
            svc.submit_guess("ash", word)
        except Exception as e:  # surfaced below
            errors.append(e)

    threads = [threading.Thread(target=play, args=(w,)) for w in WRONG]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    session = svc.start("ash")
    assert sorted(g.attempt for g in session.guesses) == [1, 2, 3, 4, 5, 6]
    assert session.status is GameStatus.LOST
    assert svc._locks == {}


def test_constructor_guards():
    with pytest.raises(ValueError):
        GameService([])
    with pytest.raises(ValueError):
        GameService(NAMES, max_attempts=0)


def test_session_locks_are_released(svc, clock):
    for i in range(50):
        svc.start(f"p{i}")
        clock.advance(3600)
    with pytest.raises(InvalidInput):
        svc.submit_guess("p0", "X")
    assert svc._locks == {}


def test_game_events_logged_as_json(svc, caplog):
    caplog.set_level(logging.DEBUG, logger="pokedle.events")
    with pytest.raises(UnknownName):
        svc.submit_guess("ash", "ABCDEFG")
    svc.submit_guess("ash", "metapod")
    svc.submit_guess("ash", "pikachu")

    records = [r for r in caplog.records if r.name == "pokedle.events"]
    events = [json.loads(r.getMessage()) for r in records]
    assert [e["action"] for e in events] == [
        "game_started", "guess_rejected", "guess_accepted", "guess_accepted", "game_won",
    ]
    assert all("\n" not in r.getMessage() for r in records)
    assert {(e["player_id"], e["answer_id"]) for e in events} == {("ash", "2026-01-01")}
    assert events[1]["details"]["error_type"] == "UnknownName"
    assert events[-1]["details"] == {"attempts": 2, "solve_seconds": 0}
    assert records[1].levelno == logging.DEBUG
