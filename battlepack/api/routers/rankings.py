"""Event-wide rankings consumed by the public rankings slider."""

from __future__ import annotations

import math
from typing import Optional

from fastapi import APIRouter, Depends

from ...core import ValidationError
from ...services.rankings import RankingAggregator
from ..responses import success_response
from .leaderboard import get_aggregator

router = APIRouter(tags=["rankings"])

MAX_PAGE_SIZE = 100


@router.get("/api/rankings")
def get_rankings(
    eventId: Optional[str] = None,
    page: int = 1,
    pageSize: int = 20,
    aggregator: RankingAggregator = Depends(get_aggregator),
):
    if not eventId or not eventId.strip():
        raise ValidationError("eventId is required")

    page = max(1, page)
    page_size = min(MAX_PAGE_SIZE, max(1, pageSize))
    result = aggregator.rankings_by_event(
        eventId.strip(),
        limit=page_size,
        offset=(page - 1) * page_size,
    )
    return success_response(
        {
            "rankings": result["rankings"],
            "total": result["total"],
            "event": result["event"],
            "page": page,
            "pageSize": page_size,
            "totalPages": math.ceil(result["total"] / page_size),
        }
    )


__all__ = ["router"]
