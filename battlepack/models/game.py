"""Database model for a single game session."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Index
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow

GAME_STATUS_RUNNING = "running"
GAME_STATUS_COMPLETED = "completed"
GAME_STATUSES = (GAME_STATUS_RUNNING, GAME_STATUS_COMPLETED)

DIFFICULTIES = ("easy", "medium", "hard")
DEFAULT_DIFFICULTY = "medium"


def new_id() -> str:
    return uuid.uuid4().hex


class Game(SQLModel, table=True):
    """A game played by 3-6 players at an event, timed from creation to completion."""

    __table_args__ = (Index("ix_game_status_created_at", "status", "created_at"),)

    id: str = ORMField(default_factory=new_id, primary_key=True)
    name: Optional[str] = None
    description: Optional[str] = None
    difficulty: str = DEFAULT_DIFFICULTY
    players_json: str = "[]"
    event_id: str = ORMField(index=True)
    host_id: str = ORMField(index=True)
    status: str = ORMField(default=GAME_STATUS_RUNNING)
    start_time: Optional[datetime] = ORMField(default_factory=utcnow)
    winner: Optional[str] = None
    winner_id: Optional[str] = None
    winner_mobile: Optional[str] = None
    winner_time: Optional[int] = None
    completed_at: Optional[datetime] = None
    created_at: datetime = ORMField(default_factory=utcnow)
    updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = [
    "DEFAULT_DIFFICULTY",
    "DIFFICULTIES",
    "GAME_STATUSES",
    "GAME_STATUS_COMPLETED",
    "GAME_STATUS_RUNNING",
    "Game",
    "new_id",
]
