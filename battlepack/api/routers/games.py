"""Game endpoints: create, read, update, complete and delete."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request

from ...core import DocumentStore, get_store
from ...services.games import GameLifecycleManager, game_to_dict
from ..responses import success_response

router = APIRouter(tags=["games"])


def get_manager(request: Request, store: DocumentStore = Depends(get_store)) -> GameLifecycleManager:
    return GameLifecycleManager(store, clock=request.app.state.clock)


@router.get("/api/games")
def list_games(
    status: Optional[str] = None,
    difficulty: Optional[str] = None,
    eventId: Optional[str] = None,
    hostId: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
    manager: GameLifecycleManager = Depends(get_manager),
):
    """List games, newest first."""

    games, total = manager.list(
        status=status,
        difficulty=difficulty,
        event_id=eventId,
        host_id=hostId,
        limit=limit,
        offset=offset,
    )
    return success_response(
        {
            "games": [game_to_dict(game) for game in games],
            "total": total,
            "limit": limit,
            "offset": offset,
        }
    )


@router.post("/api/games")
def create_game(body: Dict[str, Any], manager: GameLifecycleManager = Depends(get_manager)):
    """Start a new running game for 3-6 players."""

    game = manager.create(
        body.get("players"),
        body.get("eventId"),
        body.get("hostId"),
        name=body.get("name"),
        description=body.get("description"),
        difficulty=body.get("difficulty"),
    )
    return success_response(game_to_dict(game), "Game created successfully", 201)


@router.get("/api/games/{game_id}")
def get_game(game_id: str, manager: GameLifecycleManager = Depends(get_manager)):
    return success_response(game_to_dict(manager.get(game_id)))


@router.patch("/api/games/{game_id}")
def patch_game(game_id: str, body: Dict[str, Any], manager: GameLifecycleManager = Depends(get_manager)):
    """Complete the game when the body names a winner, otherwise update its metadata."""

    if "winner" in body:
        game = manager.complete(game_id, body.get("winner"))
        return success_response(game_to_dict(game), "Game completed successfully")

    game = manager.update(game_id, body)
    return success_response(game_to_dict(game), "Game updated successfully")


@router.delete("/api/games/{game_id}")
def delete_game(game_id: str, manager: GameLifecycleManager = Depends(get_manager)):
    """Delete a game together with its completion records."""

    manager.delete(game_id)
    return success_response(None, "Game deleted successfully")


__all__ = ["router"]
