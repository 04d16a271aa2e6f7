"""
Routes du dictionnaire des rêves.

- `GET /dreams/search`: recherche par nom (insensible aux diacritiques), filtre de catégorie.
- `GET /dreams/{slug}`: symbole par slug, 404 s'il est inconnu.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from spirithub.core.http_constants import HTTP_NOT_FOUND
from spirithub.domain.catalog import (
    DREAM_SEARCH_DEFAULT_LIMIT,
    DreamSymbol,
    search_dreams,
)
from spirithub.domain.services import DailyContentService

from .deps import get_daily_service

router = APIRouter(prefix="/dreams", tags=["dreams"])
service_dep = Depends(get_daily_service)


@router.get("/search", response_model=list[DreamSymbol])
def search(
    q: str = Query(default="", max_length=100),
    category: str | None = Query(default=None),
    limit: int = Query(default=DREAM_SEARCH_DEFAULT_LIMIT, ge=1),
    service: DailyContentService = service_dep,
):
    """Symboles dont le nom contient `q`; moins de 2 caractères -> liste vide.

    `limit` est plafonné à 50.
    """
    return search_dreams(service.catalogs.dreams, q, category=category, limit=limit)


@router.get("/{slug}", response_model=DreamSymbol)
def get_symbol(slug: str, service: DailyContentService = service_dep):
    symbol = service.catalogs.dreams.by_slug(slug)
    if symbol is None:
        raise HTTPException(status_code=HTTP_NOT_FOUND, detail="Dream symbol not found")
    return symbol
