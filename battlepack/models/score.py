"""Database model for completion records feeding the leaderboard."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Index
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow
from .game import new_id


class Score(SQLModel, table=True):
    """Winning time recorded when a game completes."""

    __table_args__ = (Index("ix_score_game_id_time", "game_id", "time"),)

    id: str = ORMField(default_factory=new_id, primary_key=True)
    player_name: str
    player_mobile: Optional[str] = None
    player_id: Optional[str] = None
    game_id: str = ORMField(index=True)
    time: Optional[float] = None
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Score"]
