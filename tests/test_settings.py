"""Tests de la configuration (validation au démarrage)."""

import pytest

from spirithub.core.container import build_daily_config, build_pick_store
from spirithub.core.settings import Settings
from spirithub.domain.errors import ConfigurationError
from spirithub.infra.repo.daily_pick_repo import SqlDailyPickRepo
from spirithub.infra.repositories import InMemoryDailyPickRepo, RedisDailyPickRepo


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_defaults() -> None:
    s = _settings(DAILY_PICK_STORE="auto")
    assert s.REFERENCE_TZ == "Europe/Bucharest"
    assert s.SELECTOR_MULTIPLIER == 31
    assert s.DAILY_TICK_MINUTE == 0
    config = build_daily_config(s)
    assert config.zone.key == "Europe/Bucharest"
    assert config.cycles == {"physical": 23, "emotional": 28, "intellectual": 33}


@pytest.mark.parametrize(
    "overrides",
    [
        {"REFERENCE_TZ": "Mars/Olympus"},
        {"REFERENCE_TZ": "  "},
        {"SELECTOR_MULTIPLIER": 32},
        {"SELECTOR_MULTIPLIER": -31},
        {"BIORHYTHM_PHYSICAL_DAYS": 0},
        {"DREAM_CATALOG_SIZE": 0},
        {"DAILY_TICK_MINUTE": 60},
        {"DAILY_TICK_INTERVAL_SECONDS": 90000},
        {"LUNAR_CYCLE_DAYS": 0},
    ],
)
def test_invalid_configuration_is_rejected(overrides) -> None:
    with pytest.raises(ConfigurationError):
        _settings(**overrides)


def test_naive_lunar_epoch_is_utc() -> None:
    s = _settings(LUNAR_EPOCH="2000-01-06T18:14:00")
    assert s.LUNAR_EPOCH.utcoffset() is not None


def test_store_selection(tmp_path) -> None:
    store, backend = build_pick_store(_settings(DAILY_PICK_STORE="memory"))
    assert isinstance(store, InMemoryDailyPickRepo) and backend == "memory"

    url = f"sqlite+pysqlite:///{tmp_path / 'picks.db'}"
    store, backend = build_pick_store(_settings(DAILY_PICK_STORE="auto", DATABASE_URL=url))
    assert isinstance(store, SqlDailyPickRepo) and backend == "sql"

    store, backend = build_pick_store(
        _settings(DAILY_PICK_STORE="auto", REDIS_URL="redis://localhost:6399/0")
    )
    assert isinstance(store, RedisDailyPickRepo) and backend == "redis"
