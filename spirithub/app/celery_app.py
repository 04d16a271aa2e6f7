"""
Module: celery_app.

But: Initialiser l'instance Celery, charger la config runtime et planifier le tick horaire des
sélections du jour (beat: minute DAILY_TICK_MINUTE de chaque heure, sans argument).

Le tick lui-même est idempotent: un beat en retard, doublé ou rattrapé après un changement
d'heure ne crée jamais plus d'une ligne par (date, kind).
"""

import structlog
from celery import Celery
from celery.schedules import crontab

from spirithub.core.container import container
from spirithub.core.logging import setup_logging
from spirithub.infra.monitoring.celery_exporter import bind_celery_signals

DAILY_TICK_TASK = "spirithub.tasks.ensure_daily_picks"

setup_logging(container.settings.LOG_LEVEL, container.settings.APP_ENV)
log = structlog.get_logger(__name__)

celery_app = Celery(
    "spirithub",
    broker=container.settings.CELERY_BROKER_URL,
    backend=container.settings.CELERY_RESULT_BACKEND,
    include=["spirithub.tasks.daily_tasks"],
)
# Load configuration from module (retries, timeouts, acks)
celery_app.config_from_object("spirithub.app.celeryconfig")
celery_app.conf.task_routes = {"spirithub.tasks.*": {"queue": "default"}}
celery_app.conf.beat_schedule = {
    "ensure-daily-picks-hourly": {
        "task": DAILY_TICK_TASK,
        "schedule": crontab(minute=container.settings.DAILY_TICK_MINUTE),
    }
}

bind_celery_signals(celery_app)
log.info("celery_app_configured", beat_minute=container.settings.DAILY_TICK_MINUTE)

__all__ = ["celery_app", "DAILY_TICK_TASK"]
