"""
Normalisation calendaire dans le fuseau de référence.

Objectif: transformer n'importe quel instant en date civile (`CalendarDate`) du fuseau de
référence (par défaut Europe/Bucharest), indépendamment du fuseau de la machine hôte et de
l'heure d'été. Les calculateurs ne lisent jamais l'heure courante eux-mêmes: la date leur est
toujours passée explicitement.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from spirithub.domain.errors import ConfigurationError, ValidationError


def resolve_zone(name: str | None) -> ZoneInfo:
    """Résout un identifiant IANA; lève `ConfigurationError` s'il est absent ou inconnu."""
    if not name or not str(name).strip():
        raise ConfigurationError("reference timezone is not configured")
    try:
        return ZoneInfo(str(name).strip())
    except (ZoneInfoNotFoundError, ValueError, OSError) as err:
        raise ConfigurationError(f"unknown timezone: {name!r}") from err


@dataclass(frozen=True, order=True)
class CalendarDate:
    """Triplet année/mois/jour civil, immuable et comparable."""

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        try:
            date(self.year, self.month, self.day)
        except (TypeError, ValueError) as err:
            raise ValidationError(
                f"invalid calendar date: {self.year}-{self.month}-{self.day}"
            ) from err

    @classmethod
    def from_date(cls, value: date) -> CalendarDate:
        """Construit depuis un `datetime.date` (un `datetime` est refusé: ambigu)."""
        if isinstance(value, datetime) or not isinstance(value, date):
            raise ValidationError("expected a calendar date, not an instant")
        return cls(value.year, value.month, value.day)

    @classmethod
    def from_iso(cls, value: str) -> CalendarDate:
        """Parse une date `YYYY-MM-DD`."""
        try:
            return cls.from_date(date.fromisoformat(str(value).strip()))
        except ValueError as err:
            raise ValidationError(f"invalid ISO date: {value!r}") from err

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.isoformat()

    @property
    def ordinal(self) -> int:
        """Nombre de jours civils depuis 0001-01-01 (base des différences de dates)."""
        return self.to_date().toordinal()

    @property
    def day_of_year(self) -> int:
        """Rang du jour dans l'année, à partir de 1."""
        return self.to_date().timetuple().tm_yday

    @property
    def weekday(self) -> int:
        """Jour de la semaine, 0 = dimanche ... 6 = samedi (clé des jours planétaires)."""
        return (self.to_date().weekday() + 1) % 7

    def shift(self, days: int) -> CalendarDate:
        return CalendarDate.from_date(self.to_date() + timedelta(days=days))

    def at_local_time(self, zone: ZoneInfo, hour: int = 0, minute: int = 0) -> datetime:
        """Instant aware correspondant à l'heure civile donnée ce jour-là dans `zone`."""
        return datetime(self.year, self.month, self.day, hour, minute, tzinfo=zone)


def normalize(instant: datetime, zone: ZoneInfo) -> CalendarDate:
    """Date civile de `instant` dans `zone`.

    Un datetime naïf est interprété comme UTC, jamais comme l'heure locale de l'hôte.
    """
    if not isinstance(instant, datetime):
        raise ValidationError("expected a datetime instant")
    if instant.tzinfo is None or instant.utcoffset() is None:
        instant = instant.replace(tzinfo=UTC)
    local = instant.astimezone(zone)
    return CalendarDate(local.year, local.month, local.day)


def today(reference_zone: ZoneInfo | str, now: datetime | None = None) -> CalendarDate:
    """Date du jour dans le fuseau de référence.

    `now` permet d'injecter l'instant (tests, tick planifié); par défaut l'instant UTC courant.
    """
    zone = reference_zone if isinstance(reference_zone, ZoneInfo) else resolve_zone(reference_zone)
    return normalize(now if now is not None else datetime.now(UTC), zone)


def coerce_date(value: CalendarDate | date | str) -> CalendarDate:
    """Accepte `CalendarDate`, `date` ou chaîne ISO; tout le reste est une erreur de validation."""
    if isinstance(value, CalendarDate):
        return value
    if isinstance(value, str):
        return CalendarDate.from_iso(value)
    if isinstance(value, date):
        return CalendarDate.from_date(value)
    raise ValidationError(f"expected a calendar date, got {type(value).__name__}")
