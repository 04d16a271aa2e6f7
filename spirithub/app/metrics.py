"""
Métriques Prometheus pour l'application.

Ce module définit les métriques HTTP, celles du contenu du jour et celles du tick de
persistance quotidienne, ainsi que la route `/metrics` et le middleware de mesure.
"""

import time

from fastapi import APIRouter, Request
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

metrics_router = APIRouter()

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "route", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "Latency of HTTP requests", ["route"]
)

# Contenu du jour
DAILY_CONTENT_BUILDS = Counter(
    "daily_content_builds_total",
    "Daily content bundles built",
    ["with_biorhythm"],
)
DAILY_PICK_READS = Counter(
    "daily_pick_reads_total",
    "Reads of persisted daily picks",
    ["kind", "source"],  # source: persisted|live
)

# Tick de persistance quotidienne
DAILY_PICK_TICKS = Counter(
    "daily_pick_ticks_total",
    "Daily pick ticks by outcome",
    ["kind", "result"],  # result: existing|inserted|conflict|unavailable
)
DAILY_PICK_TICK_LATENCY = Histogram(
    "daily_pick_tick_duration_seconds",
    "Duration of a full daily pick tick",
    buckets=[0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
)
DAILY_PICK_LAST_SUCCESS = Gauge(
    "daily_pick_last_success_timestamp",
    "Unix time of the last tick that left a pick in place",
    ["kind"],
)


UNMATCHED_ROUTE = "unmatched"


def normalize_route(request: Request) -> str:
    """Libellé `route` borné: gabarit de la route FastAPI (`/daily/picks/{day}`).

    Une requête qui ne correspond à aucune route est comptée sous `unmatched`.
    """
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


@metrics_router.get("/metrics")
def metrics():
    """
    Expose les métriques Prometheus au format texte.

    Returns:
        Response: Réponse HTTP contenant les métriques au format Prometheus.
    """
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware Prometheus pour mesurer les métriques HTTP.

    Compte les requêtes et mesure la latence par route.
    """

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response: Response = await call_next(request)
        route = normalize_route(request)
        REQUEST_COUNT.labels(request.method, route, str(response.status_code)).inc()
        REQUEST_LATENCY.labels(route).observe(time.perf_counter() - start)
        return response
