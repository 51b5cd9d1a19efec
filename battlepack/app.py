"""FastAPI application factory and configuration."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel

from . import models  # noqa: F401 - ensure models are registered with SQLModel
from .api import register_routes
from .core import (
    ALLOWED_CORS_ORIGINS,
    DATABASE_URL,
    DB_RESET,
    ENFORCE_STORE_INDEXES,
    LOG_DIR,
    LOG_LEVEL,
    make_engine,
    setup_logging,
    utcnow,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = app.state.engine
    if DB_RESET:
        SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield
    engine.dispose()


def create_app(
    database_url: Optional[str] = None,
    *,
    clock: Callable[[], datetime] = utcnow,
    enforce_indexes: Optional[bool] = None,
) -> FastAPI:
    """Build the API with its own engine; nothing is shared between app instances."""

    app = FastAPI(title="Battle Pack Game API", version="1.0.0", lifespan=lifespan)
    app.state.engine = make_engine(database_url or DATABASE_URL)
    app.state.clock = clock
    app.state.enforce_indexes = ENFORCE_STORE_INDEXES if enforce_indexes is None else enforce_indexes

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    setup_logging(LOG_DIR, level=LOG_LEVEL)
    uvicorn.run(app, host="127.0.0.1", port=3000, log_config=None)
