"""
SQLAlchemy session setup with FastAPI-compatible dependency.

- engine: Synchronous engine (SQLite by default).
- SessionLocal: sessionmaker factory bound to the engine.
- get_db(): Yields a session per request and ensures it is closed.
- init_db(): Creates all registered tables.

Database URL resolution (priority):
1) Env var DATABASE_URL or DB_URL
2) lawdesk.core.config.get_settings().db_url
"""

from __future__ import annotations

import os
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from lawdesk.core.config import get_settings

__all__ = ["engine", "SessionLocal", "get_db", "init_db", "DATABASE_URL", "SQLALCHEMY_ECHO"]

DATABASE_URL: str = os.getenv("DATABASE_URL") or os.getenv("DB_URL") or get_settings().db_url

SQLALCHEMY_ECHO: bool = os.getenv("SQLALCHEMY_ECHO", "0").lower() in {"1", "true", "yes", "on"}

# -------------------------------
# Engine
# -------------------------------

if DATABASE_URL.startswith("sqlite"):
    # Uvicorn runs sync endpoints in a threadpool
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        echo=SQLALCHEMY_ECHO,
    )

    # SQLite ships with FK enforcement off
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:  # pragma: no cover
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()
else:
    engine = create_engine(
        DATABASE_URL,
        pool_pre_ping=True,
        echo=SQLALCHEMY_ECHO,
    )

# -------------------------------
# Session Factory
# -------------------------------

SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    class_=Session,
)


def get_db() -> Generator[Session, None, None]:
    """
    Yield a database session and ensure it's closed afterwards.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create every table known to the model registry."""
    from lawdesk.db.base import Base, import_all_models

    import_all_models()
    Base.metadata.create_all(bind=engine)
