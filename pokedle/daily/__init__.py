from .picker import DailyAnswer, DEFAULT_SPRITE_URL, daily_index, pick_for_date

__all__ = ["DailyAnswer", "DEFAULT_SPRITE_URL", "daily_index", "pick_for_date"]
