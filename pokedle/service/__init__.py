from .game import GameService

__all__ = ["GameService"]
