"""
Endpoint de santé pour vérifier la disponibilité de l'API.

Expose `/health` avec l'état général, le fuseau de référence et le backend de stockage.
"""

from fastapi import APIRouter

from spirithub.core.container import container

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Vérifie la disponibilité de l'API et le backend de stockage."""
    return {
        "status": "ok",
        "timezone": container.daily_config.zone.key,
        "storage": getattr(container, "storage_backend", "unknown"),
        "catalogs": {
            "oracle": len(container.catalogs.oracle),
            "dreams": len(container.catalogs.dreams),
            "energy": len(container.catalogs.energy),
        },
    }
