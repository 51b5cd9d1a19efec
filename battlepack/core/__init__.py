"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    DATABASE_URL,
    DATA_DIR,
    DB_RESET,
    ENFORCE_STORE_INDEXES,
    LOG_DIR,
    LOG_LEVEL,
)
from .database import get_store, make_engine
from .errors import (
    AlreadyCompletedError,
    ApiError,
    ConflictError,
    MissingStartTimeError,
    NotFoundError,
    ServerError,
    ValidationError,
)
from .logging import setup_logging
from .store import DocumentStore, MissingIndexError
from .time import as_utc, isoformat, utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "DATABASE_URL",
    "DATA_DIR",
    "DB_RESET",
    "ENFORCE_STORE_INDEXES",
    "LOG_DIR",
    "LOG_LEVEL",
    "AlreadyCompletedError",
    "ApiError",
    "ConflictError",
    "DocumentStore",
    "MissingIndexError",
    "MissingStartTimeError",
    "NotFoundError",
    "ServerError",
    "ValidationError",
    "as_utc",
    "get_store",
    "isoformat",
    "make_engine",
    "setup_logging",
    "utcnow",
]
