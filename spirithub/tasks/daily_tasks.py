"""
Tâche Celery du tick horaire des sélections du jour.

Invoquée par Celery beat sans argument; délègue à `run_tick` avec les composants du conteneur.
Le résultat (un dict type -> issue) sert au suivi dans les logs et Flower.
"""

from __future__ import annotations

from spirithub.app.celery_app import DAILY_TICK_TASK, celery_app
from spirithub.core.container import container
from spirithub.services.daily_picks import run_tick


@celery_app.task(name=DAILY_TICK_TASK)
def ensure_daily_picks_task() -> dict[str, str]:
    results = run_tick(container.pick_store, container.catalogs, container.daily_config)
    return {r.kind.value: r.outcome for r in results}
