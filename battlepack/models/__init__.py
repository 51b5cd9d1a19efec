"""Database model exports."""

from .event import Event
from .game import (
    DEFAULT_DIFFICULTY,
    DIFFICULTIES,
    GAME_STATUSES,
    GAME_STATUS_COMPLETED,
    GAME_STATUS_RUNNING,
    Game,
)
from .score import Score

__all__ = [
    "DEFAULT_DIFFICULTY",
    "DIFFICULTIES",
    "GAME_STATUSES",
    "GAME_STATUS_COMPLETED",
    "GAME_STATUS_RUNNING",
    "Event",
    "Game",
    "Score",
]
