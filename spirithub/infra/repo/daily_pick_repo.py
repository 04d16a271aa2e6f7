"""Accès SQL aux sélections du jour (`daily_picks`).

`insert_if_absent` s'appuie uniquement sur la contrainte d'unicité (date, kind): pas de lecture
préalable ni de verrou applicatif, deux inserts concurrents donnent un INSERTED et un CONFLICT.
"""

from __future__ import annotations

from datetime import UTC

import structlog
from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, OperationalError

from spirithub.domain.calendar import CalendarDate
from spirithub.domain.entities import DailyPick, InsertOutcome, PickKind
from spirithub.domain.errors import PersistenceConflict, PersistenceUnavailable

from .db import session_scope
from .models import DailyPickORM

log = structlog.get_logger(__name__)


def _to_entity(row: DailyPickORM) -> DailyPick:
    return DailyPick(
        date=CalendarDate.from_iso(row.date),
        kind=PickKind(row.kind),
        catalog_id=row.catalog_id,
        # SQLite relit les DateTime sans fuseau; les instants stockés sont en UTC
        chosen_at=row.chosen_at if row.chosen_at.tzinfo else row.chosen_at.replace(tzinfo=UTC),
    )


class SqlDailyPickRepo:
    """Dépôt SQLAlchemy des `DailyPick` (une session par opération)."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _insert(self, pick: DailyPick) -> None:
        """Insère la ligne; lève PersistenceConflict si (date, kind) existe déjà."""
        row = DailyPickORM(
            date=pick.date.isoformat(),
            kind=pick.kind.value,
            catalog_id=pick.catalog_id,
            chosen_at=pick.chosen_at,
        )
        try:
            with session_scope(self._engine) as session:
                session.add(row)
                session.flush()
        except IntegrityError as exc:
            raise PersistenceConflict(pick.key) from exc
        except OperationalError as exc:
            raise PersistenceUnavailable(str(exc.orig or exc)) from exc

    def insert_if_absent(self, pick: DailyPick) -> InsertOutcome:
        """Insère `pick` si aucune ligne n'existe pour (date, kind).

        Un conflit est une course bénigne: journalisé en info, renvoyé comme CONFLICT.
        Lève PersistenceUnavailable si la base est injoignable.
        """
        try:
            self._insert(pick)
        except PersistenceConflict as exc:
            log.info("daily_pick_insert_conflict", key=exc.key)
            return InsertOutcome.CONFLICT
        return InsertOutcome.INSERTED

    def get(self, date: CalendarDate, kind: PickKind) -> DailyPick | None:
        """Retourne la sélection persistée pour (date, kind), ou None."""
        stmt = select(DailyPickORM).where(
            DailyPickORM.date == date.isoformat(), DailyPickORM.kind == kind.value
        )
        try:
            with session_scope(self._engine) as session:
                row = session.execute(stmt).scalars().first()
                return _to_entity(row) if row else None
        except OperationalError as exc:
            raise PersistenceUnavailable(str(exc.orig or exc)) from exc

    def list_for_date(self, date: CalendarDate) -> list[DailyPick]:
        """Toutes les sélections d'une date, triées par type."""
        stmt = (
            select(DailyPickORM)
            .where(DailyPickORM.date == date.isoformat())
            .order_by(DailyPickORM.kind)
        )
        try:
            with session_scope(self._engine) as session:
                return [_to_entity(r) for r in session.execute(stmt).scalars().all()]
        except OperationalError as exc:
            raise PersistenceUnavailable(str(exc.orig or exc)) from exc
