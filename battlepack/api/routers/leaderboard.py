"""Leaderboard endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from ...core import DocumentStore, ValidationError, get_store
from ...services.rankings import RankingAggregator
from ..responses import success_response

router = APIRouter(tags=["leaderboard"])


def get_aggregator(store: DocumentStore = Depends(get_store)) -> RankingAggregator:
    return RankingAggregator(store)


@router.get("/api/leaderboard")
def get_leaderboard(
    gameId: Optional[str] = None,
    limit: int = 100,
    offset: int = 0,
    excludeDeleted: str = "true",
    aggregator: RankingAggregator = Depends(get_aggregator),
):
    """Ranked completion times, fastest first.

    Entries whose game has been deleted are hidden unless
    ``excludeDeleted=false`` is passed (admin views).
    """

    entries, total = aggregator.leaderboard_by_game(
        gameId or None,
        limit=limit,
        offset=offset,
        exclude_deleted=excludeDeleted.strip().lower() != "false",
    )
    return success_response(
        {
            "leaderboard": entries,
            "total": total,
            "limit": limit,
            "offset": offset,
        }
    )


@router.get("/api/leaderboard/status")
def get_leaderboard_status(
    gameId: Optional[str] = None,
    aggregator: RankingAggregator = Depends(get_aggregator),
):
    """Report whether a game has produced leaderboard entries yet."""

    if not gameId:
        raise ValidationError("Game ID is required")
    return success_response(aggregator.leaderboard_status(gameId))


__all__ = ["router"]
