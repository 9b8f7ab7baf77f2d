"""Engine, session factory and transactional scope for the portfolio DB.

The engine is built lazily from ``DB_URL`` (default: ``fpms.db`` in the
project root) and all tables are created on first use. Tests point
``DB_URL`` at a temporary file and call ``reset_engine()`` between runs.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    """Declarative base shared by every portfolio model."""


_engine: Engine | None = None
_SessionLocal: sessionmaker[Session] | None = None


def get_database_url() -> str:
    """Return ``DB_URL`` if set, else a SQLite file next to the project."""
    env_url = os.getenv("DB_URL")
    if env_url:
        return env_url

    project_root = Path(__file__).resolve().parents[3]
    db_path = project_root / "fpms.db"
    return URL.create("sqlite", database=str(db_path)).render_as_string(hide_password=False)


def _connect_args(database_url: str) -> dict:
    # Sync routes run in a threadpool, so SQLite connections cross threads.
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"check_same_thread": False}
    return {}


def _get_engine() -> Engine:
    global _engine
    if _engine is None:
        database_url = get_database_url()
        _engine = create_engine(
            database_url, echo=False, future=True, connect_args=_connect_args(database_url)
        )
        _ensure_tables_created()
    return _engine


def _ensure_tables_created() -> None:
    """Register the models on ``Base`` and create any missing tables."""
    from faculty_portfolio.data.models import (  # noqa: F401
        approval_request,
        department,
        faculty,
        portfolio,
        portfolio_item,
        portfolio_share,
        system_credentials,
    )

    Base.metadata.create_all(bind=_engine)


def _get_session_factory() -> sessionmaker[Session]:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            bind=_get_engine(),
            autoflush=False,
            expire_on_commit=False,
        )
    return _SessionLocal


def init_db() -> None:
    """Build the engine and create tables now instead of on first query."""
    _get_engine()


def reset_engine() -> None:
    """Dispose the cached engine so the next access re-reads ``DB_URL``."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None


@contextmanager
def get_session() -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on any error."""
    session = _get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
