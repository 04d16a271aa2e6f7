"""
Application principale FastAPI.

Ce module assemble les composants de l'application: middlewares, gestion d'erreurs, routes
du contenu du jour et des calculateurs, métriques.

Responsabilités du module:
- Initialiser le logging structuré et le tracing
- Construire l'application FastAPI avec son titre/debug
- Ajouter les middlewares (request id, prometheus, timing)
- Monter les routers (santé, contenu du jour, rêves, biorythme, numérologie, métriques)
- Démarrer le tick horaire dans le processus si DAILY_TICK_IN_PROCESS est activé
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from spirithub.api.errors import register_error_handlers
from spirithub.api.routes_biorhythm import router as biorhythm_router
from spirithub.api.routes_daily import router as daily_router
from spirithub.api.routes_dreams import router as dreams_router
from spirithub.api.routes_health import router as health_router
from spirithub.api.routes_numerology import router as numerology_router
from spirithub.app.metrics import PrometheusMiddleware, metrics_router
from spirithub.app.tracing import setup_tracing
from spirithub.core.container import container
from spirithub.core.logging import setup_logging
from spirithub.infra.ops.recurring_timer import RecurringTimer
from spirithub.middlewares.request_id import RequestIDMiddleware
from spirithub.middlewares.timing import TimingMiddleware
from spirithub.services.daily_picks import make_tick_handler


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    timer = None
    if container.settings.DAILY_TICK_IN_PROCESS:
        timer = RecurringTimer(
            container.settings.DAILY_TICK_INTERVAL_SECONDS,
            make_tick_handler(container.pick_store, container.catalogs, container.daily_config),
        ).start()
    try:
        yield
    finally:
        if timer is not None:
            timer.stop()


def create_app() -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog) et le tracing OTLP
    - Ajoute les middlewares utiles au debug/traçabilité
    - Enregistre les gestionnaires d'erreurs (enveloppe standard)
    - Publie les routes
    """
    settings = container.settings
    setup_logging(settings.LOG_LEVEL, settings.APP_ENV)
    setup_tracing(settings)
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG, lifespan=lifespan)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(daily_router)
    app.include_router(dreams_router)
    app.include_router(biorhythm_router)
    app.include_router(numerology_router)
    app.include_router(metrics_router)
    return app


app = create_app()
