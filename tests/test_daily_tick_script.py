"""Tests du script d'exploitation `daily_tick`."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from spirithub.domain.errors import PersistenceUnavailable
from spirithub.infra.repositories import InMemoryDailyPickRepo
from spirithub.scripts import daily_tick

SETTINGS = SimpleNamespace(LOG_LEVEL="WARNING", APP_ENV="test", DAILY_TICK_INTERVAL_SECONDS=3600)


def _container(store, catalogs, config):
    return SimpleNamespace(
        settings=SETTINGS, pick_store=store, catalogs=catalogs, daily_config=config
    )


def test_single_tick_prints_outcomes(catalogs, config, capsys) -> None:
    store = InMemoryDailyPickRepo()
    with patch.object(daily_tick, "container", _container(store, catalogs, config)):
        code = daily_tick.main(["--now", "2025-01-01T09:00:00+00:00"])
    assert code == 0
    results = json.loads(capsys.readouterr().out)
    assert [(r["kind"], r["outcome"]) for r in results] == [
        ("daily-dream", "inserted"),
        ("daily-number", "inserted"),
    ]
    assert results[0]["date"] == "2025-01-01"
    assert results[0]["catalog_id"] == "ploaie"


def test_unavailable_store_exits_non_zero(catalogs, config, capsys) -> None:
    store = MagicMock()
    store.get.side_effect = PersistenceUnavailable("db down")
    with patch.object(daily_tick, "container", _container(store, catalogs, config)):
        code = daily_tick.main([])
    assert code == 1
    assert "unavailable" in capsys.readouterr().out


def test_invalid_now_is_rejected(catalogs, config) -> None:
    store = InMemoryDailyPickRepo()
    with patch.object(daily_tick, "container", _container(store, catalogs, config)):
        with pytest.raises(SystemExit) as exc:
            daily_tick.main(["--now", "hier"])
    assert exc.value.code == 2
