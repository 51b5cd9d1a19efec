"""Database engine construction and per-request store dependency."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from fastapi import Request
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from .store import DocumentStore


def make_engine(database_url: str) -> Engine:
    """Build an engine; SQLite URLs get thread and file-path handling."""

    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(database_url, pool_pre_ping=True)

    if url.database in (None, "", ":memory:"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url, connect_args={"check_same_thread": False})


def get_store(request: Request) -> Iterator[DocumentStore]:
    """FastAPI dependency that yields a store bound to a fresh session."""

    state = request.app.state
    with Session(state.engine) as session:
        yield DocumentStore(session, enforce_indexes=state.enforce_indexes)


__all__ = ["get_store", "make_engine"]
