"""DB utilities for SQLAlchemy sessions/engine.

Uses `DATABASE_URL` env var or falls back to `sqlite+pysqlite:///:memory:` for tests.
An in-memory SQLite database is shared by every session of the engine (`StaticPool`).
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base

_MEMORY_URL = "sqlite+pysqlite:///:memory:"


def get_engine(url: str | None = None) -> Engine:
    """Crée un moteur SQLAlchemy à partir de l'URL de base de données."""
    db_url = url or os.getenv("DATABASE_URL") or _MEMORY_URL
    kwargs: dict = {}
    if db_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in db_url:
            kwargs["poolclass"] = StaticPool
    return create_engine(db_url, future=True, echo=False, **kwargs)


def create_schema(engine: Engine) -> None:
    """Crée les tables manquantes (dev/tests; en production, passer par Alembic)."""
    Base.metadata.create_all(engine)


def get_session_factory(engine: Engine) -> sessionmaker:
    """Crée une factory de sessions SQLAlchemy."""
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False)


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Contexte de session avec commit en sortie normale et rollback sur exception."""
    SessionLocal = get_session_factory(engine)
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
