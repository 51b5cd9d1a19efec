"""Aggregate API routers."""

from fastapi import APIRouter

from .games import router as games_router
from .leaderboard import router as leaderboard_router
from .rankings import router as rankings_router
from .scores import router as scores_router
from .system import router as system_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    games_router,
    scores_router,
    leaderboard_router,
    rankings_router,
)

__all__ = ["ALL_ROUTERS"]
