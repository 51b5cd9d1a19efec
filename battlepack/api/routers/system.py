"""System-level API endpoints."""

from __future__ import annotations

import logging
from typing import Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ...core import DocumentStore, get_store, isoformat, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness probe."""

    return {"ok": True}


@router.get("/api/health")
def api_health(store: DocumentStore = Depends(get_store)) -> JSONResponse:
    """Readiness probe that also checks the database connection."""

    try:
        store.ping()
    except SQLAlchemyError as exc:
        logger.warning("Health check failed: %s", exc)
        return JSONResponse(
            {
                "status": "unhealthy",
                "timestamp": isoformat(utcnow()),
                "database": "disconnected",
                "error": str(exc),
            },
            status_code=503,
        )
    return JSONResponse(
        {
            "status": "healthy",
            "timestamp": isoformat(utcnow()),
            "database": "connected",
        }
    )


__all__ = ["router"]
