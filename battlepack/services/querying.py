"""Ordered reads with an in-memory fallback when the store lacks an index."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple, Type, TypeVar

from sqlmodel import SQLModel

from ..core.store import DocumentStore, MissingIndexError
from ..core.time import as_utc

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Query shapes already reported, so each missing index is logged once.
_warned_shapes: Set[Tuple[str, Tuple[str, ...], str]] = set()


def _comparable(value: Any) -> Any:
    if isinstance(value, datetime):
        return as_utc(value)
    return value


def sort_records(records: Sequence[ModelT], field: str, descending: bool = False) -> List[ModelT]:
    """Stable sort on ``field`` with missing values treated as worst.

    Missing values sink to the end when ascending and rise to the front when
    descending. Ties fall back to ``created_at`` then ``id``, both ascending.
    """

    ordered = sorted(
        records,
        key=lambda record: (
            _comparable(getattr(record, "created_at", None)) or _EPOCH,
            str(getattr(record, "id", "")),
        ),
    )

    def primary(record: ModelT) -> Tuple[bool, Any]:
        value = _comparable(getattr(record, field))
        return (value is None, value)

    return sorted(ordered, key=primary, reverse=descending)


def find_sorted(
    store: DocumentStore,
    model: Type[ModelT],
    *,
    filters: Optional[Dict[str, Any]] = None,
    order_by: str,
    descending: bool = False,
) -> List[ModelT]:
    """Run an ordered query, retrying unordered and sorting locally on a missing index."""

    try:
        records = store.find(model, filters=filters, order_by=order_by, descending=descending)
    except MissingIndexError as exc:
        shape = (exc.table, exc.filters, exc.order_by)
        if shape not in _warned_shapes:
            _warned_shapes.add(shape)
            logger.warning("%s; sorting in memory instead", exc)
        records = store.find(model, filters=filters)
    return sort_records(records, order_by, descending=descending)


def paginate(records: Sequence[Any], limit: Optional[int], offset: int) -> List[Any]:
    offset = max(0, offset or 0)
    if limit is None:
        return list(records[offset:])
    return list(records[offset:offset + max(0, limit)])


__all__ = ["find_sorted", "paginate", "sort_records"]
