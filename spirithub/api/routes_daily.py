"""
Routes du contenu du jour.

- `GET /daily`: nombre du jour, énergie planétaire, phase de la lune, oracle et rêve du jour,
  plus le biorythme si `birth_date` est fourni.
- `GET /daily/picks/{date}`: sélection persistée par le tick horaire, avec repli sur le calcul
  en direct pour la date du jour.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from spirithub.core.http_constants import HTTP_NOT_FOUND
from spirithub.domain.daily_content import DailyContentBundle
from spirithub.domain.entities import PickKind
from spirithub.domain.services import DailyContentService, PickView

from .deps import get_daily_service

router = APIRouter(prefix="/daily", tags=["daily"])
service_dep = Depends(get_daily_service)


@router.get("", response_model=DailyContentBundle)
def get_daily(
    tz: str | None = Query(default=None, description="Fuseau IANA (remplace la référence)"),
    birth_date: str | None = Query(default=None, description="YYYY-MM-DD"),
    service: DailyContentService = service_dep,
):
    """
    Retourne le contenu du jour.

    Un `tz` inconnu ou une `birth_date` invalide donnent une 422.
    """
    return service.get_daily_content(tz_override=tz, birth_date=birth_date)


@router.get("/picks/{day}", response_model=PickView)
def get_pick(
    day: str,
    kind: PickKind = Query(default=PickKind.DAILY_DREAM),
    service: DailyContentService = service_dep,
):
    """
    Retourne la sélection persistée pour `day`.

    Retour: `PickView` (`persisted=false` si calculée en direct pour aujourd'hui); 404 si
    aucune sélection n'existe pour une autre date.
    """
    view = service.get_persisted_pick(day, kind)
    if view is None:
        raise HTTPException(status_code=HTTP_NOT_FOUND, detail="Daily pick not found")
    return view
