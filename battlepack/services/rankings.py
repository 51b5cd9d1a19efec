"""Ranking Aggregator: leaderboards derived from completion records.

Nothing here is persisted. Every call reads the completion records it
needs, sorts them by time (lower is better), numbers them 1..n over the
full sorted set and only then cuts out the requested page, so ``rank`` and
``total`` never depend on the pagination window.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..core.store import DocumentStore
from ..core.time import isoformat
from ..models import Event, Game, Score
from .games import game_display_name
from .querying import find_sorted, paginate, sort_records

logger = logging.getLogger(__name__)

UNKNOWN_GAME_NAME = "Unknown Game"
UNKNOWN_EVENT_NAME = "Unknown Event"


def sort_by_time(scores: List[Score], descending: bool = False) -> List[Score]:
    """Order completion records by time; records without a time count as worst."""

    return sort_records(scores, "time", descending=descending)


def ranking_entry(score: Score, rank: int, game_name: str) -> Dict[str, Any]:
    return {
        "rank": rank,
        "id": score.id,
        "playerName": score.player_name,
        "playerId": score.player_id,
        "time": score.time,
        "gameId": score.game_id,
        "gameName": game_name,
        "createdAt": isoformat(score.created_at),
    }


class RankingAggregator:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def _game_names(self, game_ids: List[str], cache: Dict[str, Optional[Game]]) -> None:
        for game_id in game_ids:
            if game_id not in cache:
                cache[game_id] = self.store.get(Game, game_id)

    def leaderboard_by_game(
        self,
        game_id: Optional[str] = None,
        *,
        limit: Optional[int] = 100,
        offset: int = 0,
        exclude_deleted: bool = True,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """Ranked completion records for one game, or for every game when ``game_id`` is None."""

        filters = {"game_id": game_id} if game_id else {}
        scores = find_sorted(self.store, Score, filters=filters, order_by="time")

        games: Dict[str, Optional[Game]] = {}
        if exclude_deleted:
            self._game_names(sorted({score.game_id for score in scores}), games)
            scores = [score for score in scores if games.get(score.game_id) is not None]

        total = len(scores)
        offset = max(0, offset or 0)
        page = paginate(scores, limit, offset)
        self._game_names(sorted({score.game_id for score in page}), games)

        entries = []
        for index, score in enumerate(page):
            game = games.get(score.game_id)
            name = game_display_name(game) if game is not None else UNKNOWN_GAME_NAME
            entries.append(ranking_entry(score, offset + index + 1, name))
        return entries, total

    def rankings_by_event(
        self,
        event_id: str,
        *,
        limit: Optional[int] = 20,
        offset: int = 0,
    ) -> Dict[str, Any]:
        """Merge the completion records of every game in an event into one ranking."""

        games = self.store.find(Game, filters={"event_id": event_id})
        if not games:
            return {"rankings": [], "total": 0, "event": None}

        event = self.store.get(Event, event_id)
        if event is not None:
            event_info = {"id": event.id, "name": event.name, "deleted": False}
        else:
            event_info = {"id": event_id, "name": UNKNOWN_EVENT_NAME, "deleted": True}

        game_map = {game.id: game for game in games}
        scores: List[Score] = []
        for game in games:
            scores.extend(find_sorted(self.store, Score, filters={"game_id": game.id}, order_by="time"))
        logger.debug("Event %s: %d games, %d completion records", event_id, len(games), len(scores))

        ranked = sort_by_time(scores)
        offset = max(0, offset or 0)
        rankings = []
        for index, score in enumerate(paginate(ranked, limit, offset)):
            entry = ranking_entry(score, offset + index + 1, game_display_name(game_map[score.game_id]))
            entry["eventId"] = event_id
            rankings.append(entry)

        return {"rankings": rankings, "total": len(ranked), "event": event_info}

    def leaderboard_status(self, game_id: str) -> Dict[str, Any]:
        """Whether a game has completion records yet, and when the latest was written."""

        scores = self.store.find(Score, filters={"game_id": game_id})
        if not scores:
            return {"hasLeaderboard": False, "lastUpdated": None, "entryCount": 0}
        latest = sort_records(scores, "created_at", descending=True)[0]
        return {
            "hasLeaderboard": True,
            "lastUpdated": isoformat(latest.created_at),
            "entryCount": len(scores),
        }


__all__ = [
    "RankingAggregator",
    "UNKNOWN_EVENT_NAME",
    "UNKNOWN_GAME_NAME",
    "ranking_entry",
    "sort_by_time",
]
