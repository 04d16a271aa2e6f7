"""
Sélecteurs déterministes du contenu du jour.

Toutes les fonctions sont pures: le résultat ne dépend que de la date (et de la taille du
catalogue), jamais d'un état externe, d'un aléa ou de l'ordre des appels.

- `select_index`: index = (jour_de_l_annee * K + annee) mod taille, K impair (31 par défaut).
- `moon_phase`: âge lunaire depuis une nouvelle lune de référence, découpé en 8 phases.
- `planetary_day`: clé du jour planétaire (0 = dimanche / Soleil ... 6 = samedi / Saturne).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from spirithub.domain.calendar import CalendarDate
from spirithub.domain.errors import ValidationError

DEFAULT_MULTIPLIER = 31
SYNODIC_MONTH_DAYS = 29.53058867
# Nouvelle lune de référence: 6 janvier 2000, 18:14 UTC.
KNOWN_NEW_MOON = datetime(2000, 1, 6, 18, 14, tzinfo=UTC)
_SECONDS_PER_DAY = 86400.0


def select_index(
    catalog_size: int, date: CalendarDate, multiplier: int = DEFAULT_MULTIPLIER
) -> int:
    """Index déterministe dans un catalogue de `catalog_size` éléments pour `date`."""
    if isinstance(catalog_size, bool) or not isinstance(catalog_size, int) or catalog_size < 1:
        raise ValidationError("invalid catalog configuration: catalog_size must be >= 1")
    return (date.day_of_year * multiplier + date.year) % catalog_size


def oracle_index(
    date: CalendarDate, catalog_size: int, multiplier: int = DEFAULT_MULTIPLIER
) -> int:
    return select_index(catalog_size, date, multiplier)


def dream_index(
    date: CalendarDate, catalog_size: int, multiplier: int = DEFAULT_MULTIPLIER
) -> int:
    return select_index(catalog_size, date, multiplier)


def planetary_day(date: CalendarDate) -> int:
    return date.weekday


@dataclass(frozen=True)
class PhaseBucket:
    upper_fraction: float
    key: str
    label: str
    icon: str


# Chaque phase couvre 1/8 du cycle, centrée sur sa position nominale; le dernier
# seizième revient à la nouvelle lune.
PHASES: tuple[PhaseBucket, ...] = (
    PhaseBucket(1 / 16, "new", "Lună nouă – un nou început", "moon-new"),
    PhaseBucket(
        3 / 16,
        "waxing_crescent",
        "Semilună în creștere – intenții și primii pași",
        "moon-waxing-crescent",
    ),
    PhaseBucket(
        5 / 16, "first_quarter", "Primul pătrar – acțiune și hotărâre", "moon-first-quarter"
    ),
    PhaseBucket(
        7 / 16,
        "waxing_gibbous",
        "Lună aproape plină – ajustări și progres",
        "moon-waxing-gibbous",
    ),
    PhaseBucket(9 / 16, "full", "Lună plină – claritate și intensitate", "moon-full"),
    PhaseBucket(
        11 / 16,
        "waning_gibbous",
        "Lună în descreștere – lecții și recunoștință",
        "moon-waning-gibbous",
    ),
    PhaseBucket(
        13 / 16,
        "last_quarter",
        "Ultimul pătrar – curățare și clarificare",
        "moon-last-quarter",
    ),
    PhaseBucket(
        15 / 16,
        "waning_crescent",
        "Semilună în descreștere – odihnă și vindecare",
        "moon-waning-crescent",
    ),
    PhaseBucket(1.0, "new", "Lună nouă – un nou început", "moon-new"),
)
PHASE_ORDER: tuple[str, ...] = tuple(p.key for p in PHASES[:-1])


@dataclass(frozen=True)
class MoonPhase:
    key: str
    label: str
    icon: str
    age_days: float
    fraction: float


def lunar_age(
    instant: datetime,
    *,
    epoch: datetime = KNOWN_NEW_MOON,
    cycle_days: float = SYNODIC_MONTH_DAYS,
) -> float:
    """Âge de la lune en jours (0 = nouvelle lune) à l'instant donné."""
    if cycle_days <= 0:
        raise ValidationError("lunar cycle length must be positive")
    elapsed = (instant - epoch).total_seconds() / _SECONDS_PER_DAY
    # Python: le modulo d'un négatif par un positif est déjà dans [0, cycle)
    return elapsed % cycle_days


def bucket_for_fraction(fraction: float) -> PhaseBucket:
    for bucket in PHASES:
        if fraction <= bucket.upper_fraction:
            return bucket
    return PHASES[0]


def moon_phase(
    date: CalendarDate,
    zone: ZoneInfo,
    *,
    epoch: datetime = KNOWN_NEW_MOON,
    cycle_days: float = SYNODIC_MONTH_DAYS,
) -> MoonPhase:
    """Phase de la lune pour `date`, évaluée à midi heure locale du fuseau de référence."""
    age = lunar_age(date.at_local_time(zone, hour=12), epoch=epoch, cycle_days=cycle_days)
    fraction = age / cycle_days
    bucket = bucket_for_fraction(fraction)
    return MoonPhase(
        key=bucket.key,
        label=bucket.label,
        icon=bucket.icon,
        age_days=round(age, 2),
        fraction=round(fraction, 4),
    )
