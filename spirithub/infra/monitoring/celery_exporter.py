"""Instrumentation Prometheus/OpenTelemetry des tâches Celery.

Branche les signaux Celery (prerun/postrun/failure/retry) sur des compteurs et un histogramme
de durée, et ouvre un span OpenTelemetry par tâche.
"""

from __future__ import annotations

import threading
import time
from typing import Any

import structlog
from celery import signals
from opentelemetry import trace
from prometheus_client import Counter, Histogram

log = structlog.get_logger(__name__)

TASK_SUCCESS = Counter("celery_task_success_total", "Tasks réussies", ["task"])
TASK_FAILURE = Counter("celery_task_failure_total", "Tasks échouées", ["task"])
TASK_RETRY = Counter("celery_task_retry_total", "Tasks en retry", ["task"])
TASK_RUNTIME_SECONDS = Histogram(
    "celery_task_runtime_seconds", "Durée d'exécution des tâches", ["task"]
)

_starts: dict[str, float] = {}
_spans: dict[str, Any] = {}
_bound = threading.Event()


def _start_span(task_name: str, task_id: str) -> None:
    tracer = trace.get_tracer(__name__)
    _spans[task_id] = tracer.start_span(name=f"celery:{task_name}")


def _end_span(task_id: str) -> None:
    span = _spans.pop(task_id, None)
    if span is not None:
        span.end()


def on_task_prerun(task_id: str, task_name: str) -> None:
    """Mémorise l'instant de départ et ouvre le span de la tâche."""
    _starts[task_id] = time.time()
    _start_span(task_name, task_id)


def on_task_postrun(task_id: str, task_name: str, state: str) -> None:
    """Observe la durée, compte les succès et ferme le span."""
    start = _starts.pop(task_id, None)
    if start is not None:
        TASK_RUNTIME_SECONDS.labels(task=task_name).observe(max(0.0, time.time() - start))
    if state.upper() == "SUCCESS":
        TASK_SUCCESS.labels(task=task_name).inc()
    _end_span(task_id)


def on_task_failure(task_id: str, task_name: str) -> None:
    TASK_FAILURE.labels(task=task_name).inc()
    _end_span(task_id)


def on_task_retry(task_name: str) -> None:
    TASK_RETRY.labels(task=task_name).inc()


def _task_name(sender: Any) -> str:
    return getattr(sender, "name", None) or "unknown"


def _pre(sender=None, task_id: str = "", **kw):  # type: ignore[no-untyped-def]
    on_task_prerun(task_id=task_id, task_name=_task_name(sender))


def _post(sender=None, task_id: str = "", state: str = "", **kw):  # type: ignore[no-untyped-def]
    on_task_postrun(task_id=task_id, task_name=_task_name(sender), state=state or "")


def _fail(sender=None, task_id: str = "", **kw):  # type: ignore[no-untyped-def]
    on_task_failure(task_id=task_id, task_name=_task_name(sender))


def _retry(sender=None, **kw):  # type: ignore[no-untyped-def]
    on_task_retry(task_name=_task_name(sender))


def bind_celery_signals(celery_app) -> bool:  # type: ignore[no-untyped-def]
    """Connecte les handlers aux signaux Celery; renvoie False si c'était déjà fait."""
    if _bound.is_set():
        return False
    signals.task_prerun.connect(_pre, weak=False)
    signals.task_postrun.connect(_post, weak=False)
    signals.task_failure.connect(_fail, weak=False)
    signals.task_retry.connect(_retry, weak=False)
    _bound.set()
    log.info("celery_signals_bound", app=getattr(celery_app, "main", None))
    return True
