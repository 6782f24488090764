"""
db.engine - Engine bootstrap and session factory.

The connection string decides the backend: Postgres (Supabase) in
production, SQLite for local development and the test-suite.  Only the
SQLite backend gets CREATE TABLE; the Postgres schema and its RPC
functions are owned by the database itself.
"""

from __future__ import annotations

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from db.models import Base

logger = logging.getLogger(__name__)

_engine = None
_SessionLocal: sessionmaker | None = None


def init_db(db_url: str) -> None:
    """Create the engine, apply SQLite pragmas, and emit CREATE TABLE."""
    global _engine, _SessionLocal

    if db_url.startswith("sqlite"):
        _engine = create_engine(db_url, echo=False, future=True)

        @event.listens_for(_engine, "connect")
        def _sqlite_pragmas(dbapi_conn, _rec):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA journal_mode=WAL")
            cur.execute("PRAGMA foreign_keys=ON")
            cur.execute("PRAGMA synchronous=NORMAL")
            cur.close()

        Base.metadata.create_all(_engine)
    else:
        _engine = create_engine(db_url, echo=False, future=True,
                                pool_pre_ping=True)

    _SessionLocal = sessionmaker(bind=_engine, expire_on_commit=False)
    logger.info("Database engine ready (%s)", _engine.url.render_as_string(hide_password=True))


def get_engine():
    if _engine is None:
        raise RuntimeError("Database not initialised - call init_db() first")
    return _engine


def get_session() -> Session:
    """Return a new session.  Caller is responsible for .close()."""
    if _SessionLocal is None:
        raise RuntimeError("Database not initialised - call init_db() first")
    return _SessionLocal()
