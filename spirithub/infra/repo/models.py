"""SQLAlchemy models for persistence layer (DailyPick)."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Classe de base pour tous les modèles SQLAlchemy."""

    metadata = MetaData()


class DailyPickORM(Base):
    """Sélection du jour persistée; une ligne par (date, kind), jamais mise à jour."""

    __tablename__ = "daily_picks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(String(10), nullable=False)  # YYYY-MM-DD, fuseau de référence
    kind = Column(String(32), nullable=False)
    catalog_id = Column(String(128), nullable=False)
    chosen_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))

    __table_args__ = (UniqueConstraint("date", "kind", name="uq_daily_picks_date_kind"),)
