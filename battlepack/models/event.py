"""Database model for events that group games."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow
from .game import new_id


class Event(SQLModel, table=True):
    id: str = ORMField(default_factory=new_id, primary_key=True)
    name: str
    description: Optional[str] = None
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Event"]
