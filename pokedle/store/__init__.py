from .memory import DailyAnswerStore, SessionStore, LeaderboardStore, rank_key
from .io import save_state, load_state, write_leaderboard_csv, timestamp_id

__all__ = [
    "DailyAnswerStore", "SessionStore", "LeaderboardStore", "rank_key",
    "save_state", "load_state", "write_leaderboard_csv", "timestamp_id",
]
