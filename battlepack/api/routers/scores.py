"""Completion record endpoints used by the admin panel."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from ...core import DocumentStore, get_store
from ...services.games import game_display_name
from ...services.scores import ScoreService, score_to_dict
from ..responses import success_response

router = APIRouter(tags=["scores"])


def get_scores(store: DocumentStore = Depends(get_store)) -> ScoreService:
    return ScoreService(store)


@router.get("/api/scores")
def list_scores(
    playerName: Optional[str] = None,
    gameId: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
    orderBy: str = "time",
    order: str = "asc",
    service: ScoreService = Depends(get_scores),
):
    scores, total = service.list(
        player_name=playerName,
        game_id=gameId,
        limit=limit,
        offset=offset,
        order_by=orderBy,
        order=order,
    )
    return success_response(
        {
            "scores": [score_to_dict(score) for score in scores],
            "total": total,
            "limit": limit,
            "offset": offset,
        }
    )


@router.post("/api/scores")
def submit_score(body: Dict[str, Any], service: ScoreService = Depends(get_scores)):
    """Record a completion time by hand for an existing game."""

    score, game = service.submit(body)
    payload = score_to_dict(score)
    payload["game"] = {"id": game.id, "name": game_display_name(game)}
    return success_response(payload, "Score submitted successfully", 201)


@router.delete("/api/scores/{score_id}")
def delete_score(score_id: str, service: ScoreService = Depends(get_scores)):
    service.delete(score_id)
    return success_response(None, "Score deleted successfully")


__all__ = ["router"]
