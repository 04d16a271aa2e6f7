"""Tests du tick horaire des sélections du jour (idempotence, courses, indisponibilité)."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from prometheus_client import REGISTRY

from spirithub.domain.calendar import CalendarDate
from spirithub.domain.entities import DailyPick, InsertOutcome, PickKind
from spirithub.domain.errors import PersistenceUnavailable
from spirithub.services.daily_picks import (
    CONFLICT,
    EXISTING,
    INSERTED,
    UNAVAILABLE,
    ensure_daily_pick,
    make_tick_handler,
    run_tick,
)

NOW = datetime(2025, 1, 1, 9, 0, tzinfo=UTC)
DAY = CalendarDate(2025, 1, 1)
KINDS_PER_TICK = 2


def _ticks(kind: str, result: str) -> float:
    value = REGISTRY.get_sample_value(
        "daily_pick_ticks_total", {"kind": kind, "result": result}
    )
    return value or 0.0


def test_first_tick_inserts_then_replays_are_noops(store, catalogs, config) -> None:
    first = run_tick(store, catalogs, config, now=NOW)
    assert [r.outcome for r in first] == [INSERTED, INSERTED]
    second = run_tick(store, catalogs, config, now=NOW)
    assert [r.outcome for r in second] == [EXISTING, EXISTING]
    assert len(store) == KINDS_PER_TICK
    assert store.get(DAY, PickKind.DAILY_DREAM).catalog_id == "ploaie"
    assert store.get(DAY, PickKind.DAILY_NUMBER).catalog_id == "11"


def test_existing_row_is_never_overwritten(store, catalogs, config) -> None:
    store.insert_if_absent(DailyPick(date=DAY, kind=PickKind.DAILY_DREAM, catalog_id="foc"))
    result = ensure_daily_pick(store, catalogs, config, now=NOW)
    assert result.outcome == EXISTING
    assert result.catalog_id == "foc"
    assert store.get(DAY, PickKind.DAILY_DREAM).catalog_id == "foc"


def test_race_lost_is_reported_as_conflict(catalogs, config) -> None:
    store = MagicMock()
    store.get.return_value = None
    store.insert_if_absent.return_value = InsertOutcome.CONFLICT
    before = _ticks("daily-dream", CONFLICT)
    result = ensure_daily_pick(store, catalogs, config, now=NOW)
    assert result.outcome == CONFLICT
    assert _ticks("daily-dream", CONFLICT) == before + 1


def test_unavailable_store_is_counted_and_not_raised(catalogs, config) -> None:
    store = MagicMock()
    store.get.side_effect = PersistenceUnavailable("db down")
    before = _ticks("daily-number", UNAVAILABLE)
    results = run_tick(store, catalogs, config, now=NOW)
    assert [r.outcome for r in results] == [UNAVAILABLE, UNAVAILABLE]
    assert all(r.catalog_id is None for r in results)
    assert _ticks("daily-number", UNAVAILABLE) == before + 1
    store.insert_if_absent.assert_not_called()


def test_unexpected_errors_propagate(catalogs, config) -> None:
    store = MagicMock()
    store.get.side_effect = RuntimeError("bug")
    with pytest.raises(RuntimeError):
        ensure_daily_pick(store, catalogs, config, now=NOW)


@pytest.mark.parametrize(
    ("instants", "local_day"),
    [
        # Passage à l'heure d'hiver: 03:00-04:00 locale est vécue deux fois
        (
            (
                datetime(2025, 10, 25, 21, 30, tzinfo=UTC),
                datetime(2025, 10, 26, 0, 30, tzinfo=UTC),
                datetime(2025, 10, 26, 1, 30, tzinfo=UTC),
            ),
            CalendarDate(2025, 10, 26),
        ),
        # Passage à l'heure d'été: 03:00-04:00 locale n'existe pas
        (
            (
                datetime(2025, 3, 29, 22, 30, tzinfo=UTC),
                datetime(2025, 3, 30, 0, 30, tzinfo=UTC),
                datetime(2025, 3, 30, 1, 30, tzinfo=UTC),
            ),
            CalendarDate(2025, 3, 30),
        ),
    ],
)
def test_dst_nights_yield_one_row_per_kind(store, catalogs, config, instants, local_day) -> None:
    outcomes = [r.outcome for now in instants for r in run_tick(store, catalogs, config, now=now)]
    assert outcomes.count(INSERTED) == KINDS_PER_TICK
    assert len(store) == KINDS_PER_TICK
    assert len(store.list_for_date(local_day)) == KINDS_PER_TICK


def test_tick_date_follows_reference_zone(store, catalogs, config) -> None:
    late_utc = datetime(2024, 12, 31, 22, 30, tzinfo=UTC)  # 00:30 à Bucarest
    results = run_tick(store, catalogs, config, now=late_utc)
    assert {r.date for r in results} == {DAY}


def test_tick_handler_takes_no_argument(store, catalogs, config) -> None:
    handler = make_tick_handler(store, catalogs, config)
    results = handler()
    assert len(results) == KINDS_PER_TICK
    assert len(store) == KINDS_PER_TICK


def test_last_success_gauge_is_set(store, catalogs, config) -> None:
    run_tick(store, catalogs, config, now=NOW, kinds=(PickKind.DAILY_DREAM,))
    value = REGISTRY.get_sample_value(
        "daily_pick_last_success_timestamp", {"kind": "daily-dream"}
    )
    assert value is not None and value > 0
