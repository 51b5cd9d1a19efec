"""Service layer helpers."""

from .games import GameLifecycleManager, elapsed_seconds, game_display_name, game_to_dict
from .players import (
    LegacyName,
    NamedPlayer,
    Player,
    parse_player,
    parse_winner_identifier,
    validate_new_players,
)
from .rankings import RankingAggregator, sort_by_time
from .scores import ScoreService, score_to_dict, validate_time

__all__ = [
    "GameLifecycleManager",
    "LegacyName",
    "NamedPlayer",
    "Player",
    "RankingAggregator",
    "ScoreService",
    "elapsed_seconds",
    "game_display_name",
    "game_to_dict",
    "parse_player",
    "parse_winner_identifier",
    "score_to_dict",
    "sort_by_time",
    "validate_new_players",
    "validate_time",
]
