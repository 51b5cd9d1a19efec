"""Game lifecycle: creation, metadata updates, completion and deletion.

A game is created ``running`` with its start time stamped by the server.
Completing it moves it to ``completed`` exactly once, computes the winner's
elapsed time in whole seconds, and then records a completion record for the
leaderboard. That second write is best-effort: the game's completion is the
authoritative change, so a failure to record the score is logged and the
completed game is still returned. The two writes are not transactional.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..core.errors import (
    AlreadyCompletedError,
    MissingStartTimeError,
    NotFoundError,
    ValidationError,
)
from ..core.store import DocumentStore
from ..core.time import as_utc, isoformat, utcnow
from ..models import (
    DEFAULT_DIFFICULTY,
    DIFFICULTIES,
    GAME_STATUSES,
    GAME_STATUS_COMPLETED,
    GAME_STATUS_RUNNING,
    Game,
    Score,
)
from .players import parse_winner_identifier, players_from_json, players_to_json, validate_new_players
from .querying import find_sorted, paginate
from .scores import ScoreService

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def game_display_name(game: Game) -> str:
    return game.name or f"Game {game.id}"


def game_to_dict(game: Game) -> Dict[str, Any]:
    """Serialise a game model to API-friendly dict."""

    return {
        "id": game.id,
        "name": game.name,
        "description": game.description,
        "difficulty": game.difficulty,
        "players": [player.to_dict() for player in players_from_json(game.players_json)],
        "eventId": game.event_id,
        "hostId": game.host_id,
        "status": game.status,
        "startTime": isoformat(game.start_time),
        "winner": game.winner,
        "winnerId": game.winner_id,
        "winnerMobile": game.winner_mobile,
        "winnerTime": game.winner_time,
        "completedAt": isoformat(game.completed_at),
        "createdAt": isoformat(game.created_at),
        "updatedAt": isoformat(game.updated_at),
    }


def _required_ref(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} is required")
    return value.strip()


def _optional_text(value: Any, label: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")
    return value


def _validate_difficulty(value: Any) -> str:
    if value not in DIFFICULTIES:
        raise ValidationError(f"Difficulty must be one of: {', '.join(DIFFICULTIES)}")
    return value


def elapsed_seconds(start: datetime, end: datetime) -> int:
    """Whole seconds between two instants, floored and never negative."""

    delta = (as_utc(end) - as_utc(start)).total_seconds()
    return max(0, math.floor(delta))


class GameLifecycleManager:
    def __init__(
        self,
        store: DocumentStore,
        *,
        scores: Optional[ScoreService] = None,
        clock: Clock = utcnow,
    ) -> None:
        self.store = store
        self.scores = scores if scores is not None else ScoreService(store)
        self.clock = clock

    def create(
        self,
        players: Any,
        event_id: Any,
        host_id: Any,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        difficulty: Optional[str] = None,
    ) -> Game:
        event = _required_ref(event_id, "Event")
        host = _required_ref(host_id, "Host")
        roster = validate_new_players(players)
        level = _validate_difficulty(difficulty) if difficulty else DEFAULT_DIFFICULTY
        name = _optional_text(name, "Name")
        description = _optional_text(description, "Description")

        now = self.clock()
        game = Game(
            name=name.strip() if name and name.strip() else None,
            description=description if description else None,
            difficulty=level,
            players_json=players_to_json(roster),
            event_id=event,
            host_id=host,
            status=GAME_STATUS_RUNNING,
            start_time=now,
            created_at=now,
            updated_at=now,
        )
        game = self.store.add(game)
        logger.info("Created game %s for event %s with %d players", game.id, event, len(roster))
        return game

    def get(self, game_id: str) -> Game:
        game = self.store.get(Game, game_id)
        if game is None:
            raise NotFoundError("Game")
        return game

    def list(
        self,
        *,
        status: Optional[str] = None,
        difficulty: Optional[str] = None,
        event_id: Optional[str] = None,
        host_id: Optional[str] = None,
        limit: Optional[int] = 50,
        offset: int = 0,
    ) -> Tuple[List[Game], int]:
        if status and status not in GAME_STATUSES:
            raise ValidationError(f"Status must be one of: {', '.join(GAME_STATUSES)}")

        filters: Dict[str, Any] = {}
        if status:
            filters["status"] = status
        if difficulty:
            filters["difficulty"] = difficulty
        if event_id:
            filters["event_id"] = event_id
        if host_id:
            filters["host_id"] = host_id

        games = find_sorted(self.store, Game, filters=filters, order_by="created_at", descending=True)
        return paginate(games, limit, offset), len(games)

    def update(self, game_id: str, body: Dict[str, Any]) -> Game:
        """Apply metadata changes; only name, description and difficulty are editable."""

        changes: Dict[str, Any] = {}
        if body.get("difficulty"):
            changes["difficulty"] = _validate_difficulty(body["difficulty"])
        name = _optional_text(body.get("name"), "Name")
        if name and name.strip():
            changes["name"] = name.strip()
        description = _optional_text(body.get("description"), "Description")
        if description is not None:
            changes["description"] = description

        game = self.get(game_id)
        return self.store.save(game, updated_at=self.clock(), **changes)

    def complete(self, game_id: str, winner_identifier: Any) -> Game:
        if not isinstance(winner_identifier, str) or not winner_identifier.strip():
            raise ValidationError("Winner is required")
        winner_identifier = winner_identifier.strip()

        game = self.store.get(Game, game_id)
        if game is None:
            raise NotFoundError("Game")
        if game.status != GAME_STATUS_RUNNING:
            raise AlreadyCompletedError()
        if game.start_time is None:
            raise MissingStartTimeError()

        winner_name, winner_mobile = parse_winner_identifier(winner_identifier)
        completed_at = self.clock()
        winner_time = elapsed_seconds(game.start_time, completed_at)

        fields: Dict[str, Any] = {
            "status": GAME_STATUS_COMPLETED,
            "winner": winner_name,
            "winner_id": winner_identifier,
            "winner_time": winner_time,
            "completed_at": completed_at,
            "updated_at": completed_at,
        }
        if winner_mobile:
            fields["winner_mobile"] = winner_mobile
        game = self.store.save(game, **fields)
        logger.info("Completed game %s: winner=%s time=%ss", game_id, winner_name, winner_time)

        self._record_completion(
            game_id, winner_name, winner_mobile, winner_identifier, winner_time, completed_at
        )
        return game

    def _record_completion(
        self,
        game_id: str,
        winner_name: str,
        winner_mobile: Optional[str],
        winner_identifier: str,
        winner_time: int,
        completed_at: datetime,
    ) -> None:
        # Best-effort: the game stays completed even if the leaderboard entry is lost.
        try:
            self.scores.record(
                winner_name,
                game_id,
                winner_time,
                player_mobile=winner_mobile,
                player_id=winner_identifier,
                created_at=completed_at,
            )
        except Exception:
            logger.exception("Failed to record completion for game %s", game_id)
            self.store.rollback()

    def delete(self, game_id: str) -> None:
        game = self.get(game_id)
        removed = self.store.delete_where(Score, game_id=game_id)
        self.store.delete(game)
        logger.info("Deleted game %s and %d completion records", game_id, removed)


__all__ = [
    "GameLifecycleManager",
    "elapsed_seconds",
    "game_display_name",
    "game_to_dict",
]
