"""
Routes du calculateur de biorythme.

- `GET /biorhythm`: lecture d'une journée (par défaut aujourd'hui dans le fuseau de référence).
- `GET /biorhythm/critical-days`: jours critiques d'une fenêtre.
"""

from fastapi import APIRouter, Depends, Query

from spirithub.api.schemas import BiorhythmResponse, CriticalDayItem, CriticalDaysResponse
from spirithub.core.http_constants import DEFAULT_CRITICAL_DAYS_WINDOW
from spirithub.domain.calendar import coerce_date, today
from spirithub.domain.cycles import biorhythm, biorhythm_summary, critical_days, cycle_level
from spirithub.domain.entities import DailyConfig

from .deps import get_daily_config

router = APIRouter(prefix="/biorhythm", tags=["biorhythm"])
config_dep = Depends(get_daily_config)


@router.get("", response_model=BiorhythmResponse)
def get_biorhythm(
    birth_date: str = Query(..., description="YYYY-MM-DD"),
    target_date: str | None = Query(default=None, description="YYYY-MM-DD"),
    config: DailyConfig = config_dep,
):
    target = coerce_date(target_date) if target_date else today(config.zone)
    reading = biorhythm(birth_date, target, **config.biorhythm_options())
    values = reading.as_dict()
    return BiorhythmResponse(
        birth_date=coerce_date(birth_date).isoformat(),
        target_date=target.isoformat(),
        physical=reading.physical,
        emotional=reading.emotional,
        intellectual=reading.intellectual,
        levels={
            name: cycle_level(values[name], config.critical_threshold) for name in config.cycles
        },
        is_critical_day=reading.is_critical_day,
        critical_cycles=list(reading.critical_cycles),
        summary=biorhythm_summary(reading, config.critical_threshold),
    )


@router.get("/critical-days", response_model=CriticalDaysResponse)
def get_critical_days(
    birth_date: str = Query(..., description="YYYY-MM-DD"),
    start_date: str | None = Query(default=None, description="YYYY-MM-DD"),
    days: int = Query(default=DEFAULT_CRITICAL_DAYS_WINDOW),
    config: DailyConfig = config_dep,
):
    """Fenêtre `[start_date, start_date + days)`; `days` négatif ou > 366 -> 422."""
    start = coerce_date(start_date) if start_date else today(config.zone)
    found = critical_days(birth_date, start, days, **config.biorhythm_options())
    return CriticalDaysResponse(
        birth_date=coerce_date(birth_date).isoformat(),
        start_date=start.isoformat(),
        days=days,
        critical_days=[
            CriticalDayItem(date=d.date.isoformat(), cycles=list(d.cycles)) for d in found
        ],
    )
