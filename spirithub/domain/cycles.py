"""
Calcul des biorythmes (cycles physique, émotionnel, intellectuel).

Chaque cycle est une sinusoïde démarrant à la naissance:
    valeur = round(100 * sin(2π * jours / période))
Les valeurs sont des pourcentages entiers dans [-100, 100]. Un jour est « critique » quand au
moins un cycle est à moins de `critical_threshold` du passage par zéro.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date

from spirithub.domain.calendar import CalendarDate, coerce_date
from spirithub.domain.errors import ValidationError

PHYSICAL = "physical"
EMOTIONAL = "emotional"
INTELLECTUAL = "intellectual"

DEFAULT_CYCLES: dict[str, int] = {PHYSICAL: 23, EMOTIONAL: 28, INTELLECTUAL: 33}
DEFAULT_CRITICAL_THRESHOLD = 10
DEFAULT_MAX_FUTURE_DAYS = 365
MAX_WINDOW_DAYS = 366

# Bornes hautes (en %) des niveaux d'interprétation; le négatif est « low ».
_LEVELS: tuple[tuple[int, str], ...] = ((40, "low"), (70, "medium"), (100, "high"))


@dataclass(frozen=True)
class CycleReading:
    """Lecture biorythmique d'une journée (pourcentages entiers)."""

    physical: int
    emotional: int
    intellectual: int
    is_critical_day: bool
    critical_cycles: tuple[str, ...] = field(default=())

    def as_dict(self) -> dict[str, object]:
        return {
            PHYSICAL: self.physical,
            EMOTIONAL: self.emotional,
            INTELLECTUAL: self.intellectual,
            "is_critical_day": self.is_critical_day,
            "critical_cycles": list(self.critical_cycles),
        }


@dataclass(frozen=True)
class CriticalDay:
    date: CalendarDate
    cycles: tuple[str, ...]


def _as_date(value: CalendarDate | date | str, field_name: str) -> CalendarDate:
    try:
        return coerce_date(value)
    except ValidationError as err:
        raise ValidationError(f"{field_name} must be a valid date") from err


def cycle_value(days: int, period: int) -> int:
    """Position d'un cycle de `period` jours après `days` jours, en pourcentage arrondi."""
    if period <= 0:
        raise ValidationError("cycle length must be a positive number of days")
    return round(100 * math.sin(2 * math.pi * days / period))


def biorhythm(
    birth_date: CalendarDate | date | str,
    target_date: CalendarDate | date | str,
    *,
    cycles: dict[str, int] | None = None,
    critical_threshold: int = DEFAULT_CRITICAL_THRESHOLD,
    max_future_days: int = DEFAULT_MAX_FUTURE_DAYS,
) -> CycleReading:
    """Calcule la lecture biorythmique de `target_date` pour une naissance `birth_date`.

    Un nombre de jours négatif (cible antérieure à la naissance) suit la même formule, dans la
    limite de `max_future_days`; au-delà l'entrée est rejetée.
    """
    birth = _as_date(birth_date, "birth_date")
    target = _as_date(target_date, "target_date")
    days = target.ordinal - birth.ordinal
    if -days > max_future_days:
        raise ValidationError("birth_date is too far after target_date")

    periods = dict(DEFAULT_CYCLES if cycles is None else cycles)
    values = {
        name: cycle_value(days, periods[name]) for name in (PHYSICAL, EMOTIONAL, INTELLECTUAL)
    }
    critical = tuple(name for name, v in values.items() if abs(v) <= critical_threshold)
    return CycleReading(
        physical=values[PHYSICAL],
        emotional=values[EMOTIONAL],
        intellectual=values[INTELLECTUAL],
        is_critical_day=bool(critical),
        critical_cycles=critical,
    )


def critical_days(
    birth_date: CalendarDate | date | str,
    start_date: CalendarDate | date | str,
    days: int,
    **options,
) -> list[CriticalDay]:
    """Liste les jours critiques sur la fenêtre [start_date, start_date + days)."""
    if days < 0:
        raise ValidationError("days must be a positive number")
    if days > MAX_WINDOW_DAYS:
        raise ValidationError(f"days must not exceed {MAX_WINDOW_DAYS}")
    start = _as_date(start_date, "start_date")
    result: list[CriticalDay] = []
    for offset in range(days):
        current = start.shift(offset)
        reading = biorhythm(birth_date, current, **options)
        if reading.is_critical_day:
            result.append(CriticalDay(date=current, cycles=reading.critical_cycles))
    return result


def cycle_level(value: int, critical_threshold: int = DEFAULT_CRITICAL_THRESHOLD) -> str:
    """Niveau d'interprétation: critical / low / medium / high."""
    if abs(value) <= critical_threshold:
        return "critical"
    if value < 0:
        return "low"
    for upper, level in _LEVELS:
        if value <= upper:
            return level
    return "high"


# Au-delà de ±30 % un cycle est franchement positif ou négatif pour la synthèse.
SUMMARY_SWING = 30

_SUMMARY_ALL_HIGH = (
    "Zi excelentă pentru activități complexe! Toate ciclurile tale sunt în fază pozitivă. "
    "Este momentul ideal pentru proiecte importante, decizii majore și activități care "
    "necesită energie fizică, claritate mentală și stabilitate emoțională."
)
_SUMMARY_ALL_LOW = (
    "Zi de odihnă și recuperare. Toate ciclurile tale sunt în fază negativă. Evită deciziile "
    "importante, efortul fizic intens și sarcinile mentale complexe. Concentrează-te pe "
    "relaxare, meditație și activități simple."
)
_SUMMARY_NEUTRAL = (
    "Zi echilibrată cu cicluri în fază neutră. Poți desfășura activități normale, "
    "dar fără a forța limitele. Ascultă-ți corpul și emoțiile."
)
# (haut, bas, critique) par cycle, dans l'ordre de la phrase
_SUMMARY_PARTS: dict[str, tuple[str, str, str]] = {
    PHYSICAL: (
        "energia fizică este ridicată - zi bună pentru sport, exerciții și "
        "activități fizice",
        "energia fizică este scăzută - evită efortul fizic intens și odihnește-te mai mult",
        "ciclul fizic este în fază critică - fii atent la sănătatea ta și "
        "evită riscurile fizice",
    ),
    EMOTIONAL: (
        "starea emoțională este pozitivă - moment bun pentru relații și comunicare",
        "starea emoțională este fragilă - evită conflictele și deciziile "
        "emoționale importante",
        "ciclul emoțional este în fază critică - fii prudent în relațiile interpersonale",
    ),
    INTELLECTUAL: (
        "claritatea mentală este excelentă - zi ideală pentru studiu, analiză și "
        "rezolvarea problemelor",
        "claritatea mentală este redusă - amână deciziile complexe și sarcinile analitice",
        "ciclul intelectual este în fază critică - verifică de două ori "
        "informațiile importante",
    ),
}


def biorhythm_summary(
    reading: CycleReading, critical_threshold: int = DEFAULT_CRITICAL_THRESHOLD
) -> str:
    """Synthèse en roumain d'une lecture biorythmique.

    Tous les cycles hauts (ou bas) donnent un texte dédié; sinon une phrase est composée des
    cycles nettement positifs, négatifs ou critiques, et un texte neutre s'il n'y en a aucun.
    """
    values = {
        PHYSICAL: reading.physical,
        EMOTIONAL: reading.emotional,
        INTELLECTUAL: reading.intellectual,
    }
    if all(v > SUMMARY_SWING for v in values.values()):
        return _SUMMARY_ALL_HIGH
    if all(v < -SUMMARY_SWING for v in values.values()):
        return _SUMMARY_ALL_LOW

    parts: list[str] = []
    for name, value in values.items():
        high, low, critical = _SUMMARY_PARTS[name]
        if value > SUMMARY_SWING:
            parts.append(high)
        elif value < -SUMMARY_SWING:
            parts.append(low)
        elif abs(value) <= critical_threshold:
            parts.append(critical)
    if not parts:
        return _SUMMARY_NEUTRAL
    summary = ", ".join(parts)
    return summary[0].upper() + summary[1:] + "."
