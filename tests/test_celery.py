"""Tests de la planification Celery du tick et de son instrumentation."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import patch

from prometheus_client import REGISTRY

from spirithub.app.celery_app import DAILY_TICK_TASK, celery_app
from spirithub.infra.monitoring import celery_exporter
from spirithub.infra.repositories import InMemoryDailyPickRepo
from spirithub.tasks.daily_tasks import ensure_daily_picks_task


def _container(catalogs, config):
    return SimpleNamespace(
        pick_store=InMemoryDailyPickRepo(), catalogs=catalogs, daily_config=config
    )


def test_beat_schedules_hourly_tick_without_arguments() -> None:
    entry = celery_app.conf.beat_schedule["ensure-daily-picks-hourly"]
    assert entry["task"] == DAILY_TICK_TASK
    assert entry["schedule"].minute == {0}
    assert entry["schedule"].hour == set(range(24))
    assert "args" not in entry
    assert DAILY_TICK_TASK in celery_app.tasks


def test_task_is_idempotent(catalogs, config) -> None:
    fake = _container(catalogs, config)
    with patch("spirithub.tasks.daily_tasks.container", fake):
        first = ensure_daily_picks_task()
        second = ensure_daily_picks_task()
    assert first == {"daily-dream": "inserted", "daily-number": "inserted"}
    assert second == {"daily-dream": "existing", "daily-number": "existing"}
    assert len(fake.pick_store) == 2


def test_eager_run_is_counted_by_exporter(catalogs, config) -> None:
    def _success() -> float:
        value = REGISTRY.get_sample_value(
            "celery_task_success_total", {"task": DAILY_TICK_TASK}
        )
        return value or 0.0

    before = _success()
    with patch("spirithub.tasks.daily_tasks.container", _container(catalogs, config)):
        result = ensure_daily_picks_task.apply()
    assert result.successful()
    assert _success() == before + 1


def test_exporter_helpers_and_idempotent_binding() -> None:
    celery_exporter.on_task_prerun("t-1", "demo")
    celery_exporter.on_task_postrun("t-1", "demo", "SUCCESS")
    celery_exporter.on_task_failure("t-2", "demo")
    celery_exporter.on_task_retry("demo")
    for name in ("success", "failure", "retry"):
        value = REGISTRY.get_sample_value(f"celery_task_{name}_total", {"task": "demo"})
        assert value and value >= 1
    assert REGISTRY.get_sample_value("celery_task_runtime_seconds_count", {"task": "demo"})
    # déjà branché à l'import de celery_app
    assert celery_exporter.bind_celery_signals(celery_app) is False
