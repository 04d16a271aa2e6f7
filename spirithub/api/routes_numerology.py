"""
Routes des calculateurs numérologiques: nombre du jour, chemin de vie, nombre du destin et
compatibilité entre deux nombres.
"""

from fastapi import APIRouter, Depends, Query

from spirithub.api.schemas import CompatibilityResponse, NumberResponse
from spirithub.domain.calendar import coerce_date, today
from spirithub.domain.entities import DailyConfig
from spirithub.domain.numerology import (
    MASTER_NUMBERS,
    compatibility,
    daily_number,
    destiny_number,
    life_path,
)

from .deps import get_daily_config

router = APIRouter(prefix="/numerology", tags=["numerology"])
config_dep = Depends(get_daily_config)


def _number(kind: str, number: int, source: str) -> NumberResponse:
    return NumberResponse(
        kind=kind, number=number, is_master=number in MASTER_NUMBERS, source=source
    )


@router.get("/daily-number", response_model=NumberResponse)
def get_daily_number(
    date: str | None = Query(default=None, description="YYYY-MM-DD, aujourd'hui par défaut"),
    config: DailyConfig = config_dep,
):
    day = coerce_date(date) if date else today(config.zone)
    return _number("daily-number", daily_number(day), day.isoformat())


@router.get("/life-path", response_model=NumberResponse)
def get_life_path(birth_date: str = Query(..., description="YYYY-MM-DD")):
    birth = coerce_date(birth_date)
    return _number("life-path", life_path(birth), birth.isoformat())


@router.get("/destiny", response_model=NumberResponse)
def get_destiny(name: str = Query(..., max_length=200)):
    return _number("destiny", destiny_number(name), name.strip())


@router.get("/compatibility", response_model=CompatibilityResponse)
def get_compatibility(first: int = Query(...), second: int = Query(...)):
    """Score 0-100; un nombre hors 1-9/11/22/33 donne une 422."""
    return CompatibilityResponse(first=first, second=second, score=compatibility(first, second))
