"""
Agrégation du contenu du jour.

`build_daily_content` compose, pour une date donnée, le nombre du jour, l'énergie planétaire,
la phase de la lune, le message de l'oracle et le rêve du jour. Composition pure: aucune E/S,
aucun état partagé mutable; appelable autant de fois que nécessaire avec le même résultat.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict

from spirithub.domain.calendar import CalendarDate, coerce_date
from spirithub.domain.catalog import Catalog, Catalogs, DreamSymbol, OracleMessage, PlanetaryDay
from spirithub.domain.cycles import biorhythm
from spirithub.domain.entities import DailyConfig
from spirithub.domain.errors import ConfigurationError
from spirithub.domain.numerology import daily_number
from spirithub.domain.selectors import (
    dream_index,
    moon_phase,
    oracle_index,
    planetary_day,
)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class MoonPhaseView(_Frozen):
    key: str
    label: str
    icon: str
    age_days: float


class OraclePick(_Frozen):
    index: int
    message: OracleMessage


class DreamPick(_Frozen):
    index: int
    symbol: DreamSymbol


class BiorhythmView(_Frozen):
    birth_date: str
    physical: int
    emotional: int
    intellectual: int
    is_critical_day: bool
    critical_cycles: list[str]


class DailyContentBundle(_Frozen):
    """Contenu du jour remis à la couche de rendu.

    `biorhythm` n'est présent que si une date de naissance a été fournie.
    """

    date: str
    timezone: str
    daily_number: int
    energy: PlanetaryDay
    moon_phase: MoonPhaseView
    oracle: OraclePick
    dream: DreamPick
    biorhythm: BiorhythmView | None = None


def effective_size(catalog: Catalog, configured: int | None) -> int:
    """Taille utilisée pour la sélection: celle configurée, bornée par le catalogue chargé."""
    if configured is None:
        return len(catalog)
    if configured < 1:
        raise ConfigurationError(f"catalog {catalog.name!r} size must be >= 1")
    return min(configured, len(catalog))


def pick_dream(day: CalendarDate, catalogs: Catalogs, config: DailyConfig) -> DreamPick:
    size = effective_size(catalogs.dreams, config.dream_catalog_size)
    index = dream_index(day, size, config.multiplier)
    return DreamPick(index=index, symbol=catalogs.dreams[index])


def pick_oracle(day: CalendarDate, catalogs: Catalogs, config: DailyConfig) -> OraclePick:
    size = effective_size(catalogs.oracle, config.oracle_catalog_size)
    index = oracle_index(day, size, config.multiplier)
    return OraclePick(index=index, message=catalogs.oracle[index])


def build_daily_content(
    day: CalendarDate | date | str,
    birth_date: CalendarDate | date | str | None = None,
    *,
    catalogs: Catalogs,
    config: DailyConfig,
) -> DailyContentBundle:
    """Construit le `DailyContentBundle` de `day`.

    Paramètres:
    - day: date civile dans le fuseau de référence.
    - birth_date: date de naissance optionnelle; sans elle, le biorythme est omis.
    - catalogs: catalogues chargés (oracle, rêves, énergie).
    - config: paramètres de calcul.
    """
    d = coerce_date(day)
    phase = moon_phase(
        d, config.zone, epoch=config.lunar_epoch, cycle_days=config.lunar_cycle_days
    )
    bio = None
    if birth_date is not None:
        birth = coerce_date(birth_date)
        reading = biorhythm(birth, d, **config.biorhythm_options())
        bio = BiorhythmView(
            birth_date=birth.isoformat(),
            physical=reading.physical,
            emotional=reading.emotional,
            intellectual=reading.intellectual,
            is_critical_day=reading.is_critical_day,
            critical_cycles=list(reading.critical_cycles),
        )
    return DailyContentBundle(
        date=d.isoformat(),
        timezone=config.zone.key,
        daily_number=daily_number(d),
        energy=catalogs.energy[planetary_day(d)],
        moon_phase=MoonPhaseView(
            key=phase.key, label=phase.label, icon=phase.icon, age_days=phase.age_days
        ),
        oracle=pick_oracle(d, catalogs, config),
        dream=pick_dream(d, catalogs, config),
        biorhythm=bio,
    )
