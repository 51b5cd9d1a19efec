"""Completion records: validation, listing and removal."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from ..core.errors import NotFoundError, ValidationError
from ..core.store import DocumentStore
from ..core.time import isoformat, utcnow
from ..models import Game, Score
from .querying import find_sorted, paginate

logger = logging.getLogger(__name__)

SCORE_ORDER_FIELDS = {
    "time": "time",
    "createdAt": "created_at",
    "playerName": "player_name",
}


def _required_text(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} is required")
    return value.strip()


def validate_time(value: Any) -> float:
    """Return ``value`` as non-negative seconds or raise ``ValidationError``."""

    if value is None or value == "":
        raise ValidationError("Time is required")
    if isinstance(value, bool):
        raise ValidationError("Time must be a number")
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Time must be a number") from None
    if math.isnan(seconds) or math.isinf(seconds):
        raise ValidationError("Time must be a number")
    if seconds < 0:
        raise ValidationError("Time must be at least 0")
    return seconds


def score_to_dict(score: Score) -> Dict[str, Any]:
    """Serialise a score model to API-friendly dict."""

    return {
        "id": score.id,
        "playerName": score.player_name,
        "playerMobile": score.player_mobile,
        "playerId": score.player_id,
        "gameId": score.game_id,
        "time": score.time,
        "createdAt": isoformat(score.created_at),
    }


class ScoreService:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def record(
        self,
        player_name: Any,
        game_id: Any,
        time: Any,
        *,
        player_mobile: Optional[str] = None,
        player_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> Score:
        """Validate and persist one completion record; nothing is written on failure."""

        name = _required_text(player_name, "Player Name")
        game = _required_text(game_id, "Game ID")
        seconds = validate_time(time)

        score = Score(
            player_name=name,
            player_mobile=player_mobile or None,
            player_id=player_id or None,
            game_id=game,
            time=seconds,
            created_at=created_at or utcnow(),
        )
        return self.store.add(score)

    def submit(self, body: Dict[str, Any]) -> Tuple[Score, Game]:
        """Manual entry from the admin panel; the game must exist."""

        name = _required_text(body.get("playerName"), "Player Name")
        game_id = _required_text(body.get("gameId"), "Game ID")
        validate_time(body.get("time"))

        game = self.store.get(Game, game_id)
        if game is None:
            raise NotFoundError("Game")

        score = self.record(
            name,
            game_id,
            body.get("time"),
            player_mobile=body.get("playerMobile"),
            player_id=body.get("playerId"),
        )
        return score, game

    def list(
        self,
        *,
        player_name: Optional[str] = None,
        game_id: Optional[str] = None,
        limit: Optional[int] = 50,
        offset: int = 0,
        order_by: str = "time",
        order: str = "asc",
    ) -> Tuple[List[Score], int]:
        field = SCORE_ORDER_FIELDS.get(order_by)
        if field is None:
            raise ValidationError(
                f"orderBy must be one of: {', '.join(SCORE_ORDER_FIELDS)}"
            )
        if order not in ("asc", "desc"):
            raise ValidationError("order must be one of: asc, desc")

        filters: Dict[str, Any] = {}
        if player_name:
            filters["player_name"] = player_name
        if game_id:
            filters["game_id"] = game_id

        scores = find_sorted(
            self.store, Score, filters=filters, order_by=field, descending=order == "desc"
        )
        return paginate(scores, limit, offset), len(scores)

    def delete(self, score_id: str) -> None:
        score = self.store.get(Score, score_id)
        if score is None:
            raise NotFoundError("Score")
        game_id = score.game_id
        self.store.delete(score)
        logger.info("Deleted score %s for game %s", score_id, game_id)


__all__ = ["SCORE_ORDER_FIELDS", "ScoreService", "score_to_dict", "validate_time"]
