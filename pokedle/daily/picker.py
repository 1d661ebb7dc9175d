"""
Pokémon of the day.

Every player sees the same Pokémon on a given UTC calendar day. The pick is
a pure function of the date: SHA-256 over the ISO date string, reduced modulo
the pool size. No process-wide "today" is cached here; callers pass the date and store the result in the
answer store, which keeps exactly one answer per date.
"""

from __future__ import annotations

import datetime as dt
import hashlib
from dataclasses import dataclass
from typing import Dict, Sequence

DEFAULT_SPRITE_URL = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/{id}.png"
)


@dataclass(frozen=True)
class DailyAnswer:
    date: dt.date
    pokemon_id: int      # 1-based position in the names list (national-dex order)
    name: str            # canonical uppercase answer word
    image_url: str

    @property
    def answer_id(self) -> str:
        """Identity of the daily puzzle; one per date."""
        return self.date.isoformat()

    def to_dict(self) -> Dict:
        return {
            "date": self.date.isoformat(),
            "pokemon_id": self.pokemon_id,
            "name": self.name,
            "image_url": self.image_url,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "DailyAnswer":
        return cls(
            date=dt.date.fromisoformat(d["date"]),
            pokemon_id=int(d["pokemon_id"]),
            name=d["name"],
            image_url=d["image_url"],
        )


def daily_index(day: dt.date, pool_size: int) -> int:
    """Deterministic 0-based index into a pool of `pool_size` names for `day`."""
    if pool_size < 1:
        raise ValueError("name pool is empty")
    digest = hashlib.sha256(day.isoformat().encode("ascii")).digest()
    return int.from_bytes(digest[:8], "big") % pool_size


def pick_for_date(day: dt.date, names: Sequence[str],
                  sprite_url: str = DEFAULT_SPRITE_URL) -> DailyAnswer:
    """
    Resolve the DailyAnswer for `day` from `names` (canonical, dex-ordered).

    Example:
      pick_for_date(date(2026, 1, 1), ["bulbasaur", ...]).name -> "..." (stable per date)
    """
    idx = daily_index(day, len(names))
    pokemon_id = idx + 1
    return DailyAnswer(
        date=day,
        pokemon_id=pokemon_id,
        name=names[idx].strip().upper(),
        image_url=sprite_url.format(id=pokemon_id),
    )
