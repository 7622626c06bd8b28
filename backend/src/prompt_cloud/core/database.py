from __future__ import annotations

import logging
import sqlite3
from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from .config import settings


log = logging.getLogger("prompt_cloud.core.database")


class Base(DeclarativeBase):
    """Base declarative class for SQLAlchemy models."""


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
    """SQLite ignores FOREIGN KEY clauses unless asked; folder cascade depends on them."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(settings.database_url, echo=settings.database_echo, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def init_database(bind: Engine | None = None) -> None:
    """Create schema if it does not exist."""
    # Import models so SQLAlchemy is aware of them before creating tables.
    from .. import models  # noqa: F401

    target = bind or engine
    Base.metadata.create_all(bind=target)
    _ensure_prompt_indexes(target)
    log.info("Database initialized (tables ensured).")


def check_connection(bind: Engine | None = None) -> None:
    """Round-trip a trivial statement so startup fails early on a dead store."""
    target = bind or engine
    with target.connect() as conn:
        conn.execute(text("SELECT 1"))
    log.info("Database connected successfully.")


def dispose_engine() -> None:
    engine.dispose()
    log.info("Database engine disposed.")


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a session."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def _ensure_prompt_indexes(bind: Engine) -> None:
    """Ensure the composite index used by folder listings exists.

    Uses CREATE INDEX IF NOT EXISTS to avoid errors on repeated startups.
    """
    stmts = [
        "CREATE INDEX IF NOT EXISTS ix_prompts_folder_created ON prompts (folder_id, created_at)",
    ]
    with bind.begin() as conn:
        for sql in stmts:
            conn.execute(text(sql))
    log.debug("Prompt composite indexes ensured.")
