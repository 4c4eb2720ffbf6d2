"""Database configuration and session helpers."""

from __future__ import annotations

from typing import Iterator, Optional

import structlog
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from .config import DATA_DIR, DATABASE_URL

logger = structlog.get_logger(__name__)

_engine: Optional[Engine] = None
_initialized = False


def _default_url() -> str:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{DATA_DIR / 'thriftstore.db'}"


def build_engine(url: str) -> Engine:
    """Create an engine for ``url`` with SQLite-friendly connection options."""

    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)
    if url in {"sqlite://", "sqlite:///:memory:"}:
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, connect_args={"check_same_thread": False})


def get_engine() -> Engine:
    """Return the shared engine, creating it on first use."""

    global _engine
    if _engine is None:
        _engine = build_engine(DATABASE_URL or _default_url())
        logger.info("database_engine_created", dialect=_engine.dialect.name)
    return _engine


def init_db(*, reset: bool = False) -> None:
    """Create tables once per process.

    Repeated calls are no-ops. A failure propagates to the caller and is
    not retried.
    """

    global _initialized
    if _initialized and not reset:
        return
    engine = get_engine()
    if reset:
        SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    _initialized = True
    logger.info("database_initialized", reset=reset)


def get_session() -> Iterator[Session]:
    """FastAPI dependency that yields a database session."""

    init_db()
    with Session(get_engine()) as session:
        yield session


__all__ = ["build_engine", "get_engine", "get_session", "init_db"]
