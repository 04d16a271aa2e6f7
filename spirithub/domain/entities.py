"""
Entités du domaine métier.

Ce module définit la seule entité persistée du cœur (`DailyPick`) et les paramètres de calcul
du contenu du jour (`DailyConfig`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from zoneinfo import ZoneInfo

from spirithub.domain.calendar import CalendarDate
from spirithub.domain.cycles import (
    DEFAULT_CRITICAL_THRESHOLD,
    DEFAULT_CYCLES,
    DEFAULT_MAX_FUTURE_DAYS,
)
from spirithub.domain.selectors import DEFAULT_MULTIPLIER, KNOWN_NEW_MOON, SYNODIC_MONTH_DAYS


class PickKind(str, Enum):
    """Type de sélection persistée (une ligne par date et par type)."""

    DAILY_DREAM = "daily-dream"
    DAILY_NUMBER = "daily-number"


class InsertOutcome(str, Enum):
    INSERTED = "inserted"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class DailyPick:
    """Sélection du jour persistée; jamais modifiée une fois créée.

    Attributs
    - date: date civile du fuseau de référence (clé unique avec `kind`).
    - kind: type de sélection.
    - catalog_id: identifiant stable de l'entrée (slug du rêve, nombre du jour).
    - chosen_at: instant UTC de l'insertion.
    """

    date: CalendarDate
    kind: PickKind
    catalog_id: str
    chosen_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def key(self) -> str:
        return f"{self.kind.value}:{self.date.isoformat()}"


@dataclass(frozen=True)
class DailyConfig:
    """Paramètres de calcul (issus de `Settings`, validés au démarrage)."""

    zone: ZoneInfo
    multiplier: int = DEFAULT_MULTIPLIER
    cycles: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_CYCLES))
    critical_threshold: int = DEFAULT_CRITICAL_THRESHOLD
    max_future_days: int = DEFAULT_MAX_FUTURE_DAYS
    lunar_epoch: datetime = KNOWN_NEW_MOON
    lunar_cycle_days: float = SYNODIC_MONTH_DAYS
    oracle_catalog_size: int | None = None
    dream_catalog_size: int | None = None

    def biorhythm_options(self) -> dict:
        return {
            "cycles": self.cycles,
            "critical_threshold": self.critical_threshold,
            "max_future_days": self.max_future_days,
        }
