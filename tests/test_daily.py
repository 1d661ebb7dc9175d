import datetime as dt

import pytest
from pokedle.daily import DailyAnswer, daily_index, pick_for_date
from pokedle.datasets import load_names

NAMES = ["bulbasaur", "ivysaur", "venusaur", "charmander", "pikachu"]


def test_daily_index_is_stable_per_date():
    day = dt.date(2026, 3, 14)
    assert daily_index(day, 151) == daily_index(day, 151)
    assert 0 <= daily_index(day, 151) < 151


def test_daily_index_varies_across_days():
    days = [dt.date(2026, 1, 1) + dt.timedelta(days=i) for i in range(60)]
    picks = {daily_index(d, 151) for d in days}
    assert len(picks) > 20


def test_daily_index_empty_pool():
    with pytest.raises(ValueError):
        daily_index(dt.date(2026, 1, 1), 0)


def test_pick_for_date_fields():
    day = dt.date(2026, 1, 1)
    a = pick_for_date(day, NAMES, sprite_url="https://img/{id}.png")
    idx = daily_index(day, len(NAMES))
    assert a.name == NAMES[idx].upper()
    assert a.pokemon_id == idx + 1
    assert a.image_url == f"https://img/{idx + 1}.png"
    assert a.answer_id == "2026-01-01"


def test_daily_answer_dict_round_trip():
    a = DailyAnswer(dt.date(2026, 1, 1), 25, "PIKACHU", "https://img/25.png")
    assert DailyAnswer.from_dict(a.to_dict()) == a


def test_bundled_names_are_dex_ordered():
    names = load_names()
    assert len(names) == 151
    assert names[0] == "bulbasaur"
    assert names[24] == "pikachu"
    assert "mrmime" in names and "farfetchd" in names
