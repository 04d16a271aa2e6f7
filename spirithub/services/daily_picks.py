"""
Tick de persistance des sélections du jour.

Le tick est déclenché toutes les heures (Celery beat ou `RecurringTimer`), sans argument. Pour
chaque type de sélection, il calcule la date du jour dans le fuseau de référence et écrit la
sélection seulement si elle est absente. Rejouer le tick, l'exécuter en retard ou en double
laisse exactement une ligne par (date, kind).

Issues d'un tick (`TickResult.outcome`):
- existing: la ligne existait déjà, aucune écriture.
- inserted: la ligne vient d'être créée.
- conflict: un autre tick a écrit entre la lecture et l'insertion (course bénigne).
- unavailable: stockage injoignable; le tick suivant retentera.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

import structlog

from spirithub.app.metrics import (
    DAILY_PICK_LAST_SUCCESS,
    DAILY_PICK_TICK_LATENCY,
    DAILY_PICK_TICKS,
)
from spirithub.domain.calendar import CalendarDate, today
from spirithub.domain.catalog import Catalogs
from spirithub.domain.daily_content import pick_dream
from spirithub.domain.entities import DailyConfig, DailyPick, InsertOutcome, PickKind
from spirithub.domain.errors import PersistenceUnavailable
from spirithub.domain.numerology import daily_number

log = structlog.get_logger(__name__)

EXISTING = "existing"
INSERTED = "inserted"
CONFLICT = "conflict"
UNAVAILABLE = "unavailable"


class DailyPickStore(Protocol):
    def insert_if_absent(self, pick: DailyPick) -> InsertOutcome: ...

    def get(self, date: CalendarDate, kind: PickKind) -> DailyPick | None: ...


@dataclass(frozen=True)
class TickResult:
    date: CalendarDate
    kind: PickKind
    outcome: str
    catalog_id: str | None = None


def select_catalog_id(
    day: CalendarDate, kind: PickKind, catalogs: Catalogs, config: DailyConfig
) -> str:
    """Identifiant stable de la sélection du jour (slug du rêve, nombre du jour)."""
    if kind is PickKind.DAILY_DREAM:
        return pick_dream(day, catalogs, config).symbol.slug
    return str(daily_number(day))


def ensure_daily_pick(
    store: DailyPickStore,
    catalogs: Catalogs,
    config: DailyConfig,
    *,
    kind: PickKind = PickKind.DAILY_DREAM,
    now: datetime | None = None,
) -> TickResult:
    """Écrit la sélection du jour pour `kind` si elle n'existe pas encore.

    `PersistenceUnavailable` est absorbée ici (journalisée, comptée) car le tick suivant
    rattrape; toute autre erreur remonte au déclencheur.
    """
    day = today(config.zone, now)
    try:
        existing = store.get(day, kind)
        if existing is not None:
            result = TickResult(day, kind, EXISTING, existing.catalog_id)
        else:
            catalog_id = select_catalog_id(day, kind, catalogs, config)
            outcome = store.insert_if_absent(DailyPick(date=day, kind=kind, catalog_id=catalog_id))
            if outcome is InsertOutcome.INSERTED:
                result = TickResult(day, kind, INSERTED, catalog_id)
                log.info("daily_pick_inserted", date=str(day), kind=kind.value, id=catalog_id)
            else:
                result = TickResult(day, kind, CONFLICT, catalog_id)
                log.info("daily_pick_conflict", date=str(day), kind=kind.value)
    except PersistenceUnavailable as exc:
        log.warning("daily_pick_store_unavailable", date=str(day), kind=kind.value, error=str(exc))
        DAILY_PICK_TICKS.labels(kind.value, UNAVAILABLE).inc()
        return TickResult(day, kind, UNAVAILABLE)
    DAILY_PICK_TICKS.labels(kind.value, result.outcome).inc()
    DAILY_PICK_LAST_SUCCESS.labels(kind.value).set_to_current_time()
    return result


def run_tick(
    store: DailyPickStore,
    catalogs: Catalogs,
    config: DailyConfig,
    *,
    now: datetime | None = None,
    kinds: tuple[PickKind, ...] = tuple(PickKind),
) -> list[TickResult]:
    """Exécute le tick pour chaque type; la même horloge sert à tous les types."""
    start = time.perf_counter()
    now = now or datetime.now(UTC)
    results = [
        ensure_daily_pick(store, catalogs, config, kind=kind, now=now) for kind in kinds
    ]
    DAILY_PICK_TICK_LATENCY.observe(time.perf_counter() - start)
    log.debug("daily_tick_done", outcomes={r.kind.value: r.outcome for r in results})
    return results


def make_tick_handler(store: DailyPickStore, catalogs: Catalogs, config: DailyConfig):
    """Handler sans argument pour `RecurringTimer` (l'horloge est lue à chaque appel)."""

    def _tick() -> list[TickResult]:
        return run_tick(store, catalogs, config)

    return _tick
