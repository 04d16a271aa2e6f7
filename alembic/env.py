"""
Environnement Alembic des migrations `daily_picks`.

L'URL vient de DATABASE_URL (SQLite local par défaut); les modes offline (SQL littéral) et
online (connexion active) sont tous deux supportés.
"""

from __future__ import annotations

import os
import sys
from logging.config import fileConfig
from pathlib import Path

from sqlalchemy import create_engine, pool

from alembic import context  # type: ignore[attr-defined]

# Permet d'importer `spirithub` lorsque la CLI Alembic est lancée depuis la racine ou alembic/
_this = Path(__file__).resolve()
for p in (_this.parent.parent, Path.cwd()):
    s = str(p)
    if s not in sys.path:
        sys.path.append(s)

from spirithub.infra.repo.models import Base  # noqa: E402

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
_DEFAULT_URL = "sqlite:///./spirithub.db"


def _database_url() -> str:
    return os.getenv("DATABASE_URL", _DEFAULT_URL)


def run_migrations_offline() -> None:
    """Émet le SQL des migrations sans connexion à la base."""
    context.configure(url=_database_url(), target_metadata=target_metadata, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Applique les migrations via une connexion SQLAlchemy (pool désactivé)."""
    connectable = create_engine(_database_url(), poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
