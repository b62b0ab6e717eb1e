"""Database connection and session management.

This module builds the SQLAlchemy engine and session factory from the
configured database URL. The application factory stores the session factory
on ``app.state`` and ``get_db`` hands out one session per request.
"""

import logging
from pathlib import Path
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from models.base import Base
# Import models to ensure they are registered with Base.metadata
import models  # noqa: F401

logger = logging.getLogger(__name__)


def make_engine(database_url: str) -> Engine:
    """Create an engine for the given URL.

    SQLite connections are shared across threads; in-memory SQLite uses a
    single static connection so every session sees the same database.

    Args:
        database_url: SQLAlchemy database URL.

    Returns:
        Configured Engine.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        logger.info("Connecting to %s database", url.get_backend_name())
        return create_engine(database_url, pool_pre_ping=True)

    if url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        logger.info("Using SQLite database at %s", url.database)
        return create_engine(
            database_url, connect_args={"check_same_thread": False}
        )

    return create_engine(
        database_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create tables if they do not exist."""
    Base.metadata.create_all(bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting a database session."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
