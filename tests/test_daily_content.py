"""Tests de l'agrégation du contenu du jour."""

from __future__ import annotations

from dataclasses import replace

import pytest

from spirithub.domain.calendar import CalendarDate
from spirithub.domain.daily_content import build_daily_content, effective_size, pick_dream
from spirithub.domain.errors import ConfigurationError, ValidationError

DAY = CalendarDate(2025, 1, 1)
DREAM_INDEX_2025_01_01 = 16  # (31 + 2025) % 20
ORACLE_INDEX_2025_01_01 = 1  # (31 + 2025) % 15
MASTER_11 = 11


def test_bundle_for_known_day(catalogs, config) -> None:
    bundle = build_daily_content(DAY, catalogs=catalogs, config=config)
    assert bundle.date == "2025-01-01"
    assert bundle.timezone == "Europe/Bucharest"
    assert bundle.daily_number == MASTER_11
    assert bundle.energy.weekday == 3  # mercredi
    assert bundle.dream.index == DREAM_INDEX_2025_01_01
    assert bundle.dream.symbol.slug == "ploaie"
    assert bundle.oracle.index == ORACLE_INDEX_2025_01_01
    assert bundle.oracle.message.slug == "curajul"
    assert bundle.biorhythm is None


def test_bundle_is_deterministic(catalogs, config) -> None:
    first = build_daily_content("2025-07-14", catalogs=catalogs, config=config)
    second = build_daily_content(CalendarDate(2025, 7, 14), catalogs=catalogs, config=config)
    assert first == second
    assert first.model_dump() == second.model_dump()


def test_biorhythm_only_with_birth_date(catalogs, config) -> None:
    bundle = build_daily_content(DAY, "2025-01-01", catalogs=catalogs, config=config)
    assert bundle.biorhythm is not None
    assert bundle.biorhythm.physical == 0
    assert bundle.biorhythm.is_critical_day is True
    assert "biorhythm" in bundle.model_dump()


def test_invalid_birth_date_is_rejected(catalogs, config) -> None:
    with pytest.raises(ValidationError):
        build_daily_content(DAY, "1990-02-30", catalogs=catalogs, config=config)


def test_configured_dream_size_caps_selection(catalogs, config) -> None:
    capped = replace(config, dream_catalog_size=5)
    for offset in range(40):
        assert pick_dream(DAY.shift(offset), catalogs, capped).index < 5


def test_effective_size(catalogs) -> None:
    assert effective_size(catalogs.dreams, None) == len(catalogs.dreams)
    assert effective_size(catalogs.dreams, 1000) == len(catalogs.dreams)
    assert effective_size(catalogs.dreams, 3) == 3
    with pytest.raises(ConfigurationError):
        effective_size(catalogs.dreams, 0)


def test_energy_follows_weekday(catalogs, config) -> None:
    sunday = build_daily_content("2025-01-05", catalogs=catalogs, config=config)
    saturday = build_daily_content("2025-01-11", catalogs=catalogs, config=config)
    assert sunday.energy.planet == "Soarele"
    assert saturday.energy.planet == "Saturn"


def test_bundles_do_not_share_mutable_state(catalogs, config) -> None:
    """Les listes de l'énergie du jour sont figées: un bundle n'altère pas le suivant."""
    first = build_daily_content("2025-01-05", catalogs=catalogs, config=config)
    original_tips = first.energy.tips
    assert isinstance(original_tips, tuple)
    with pytest.raises(AttributeError):
        first.energy.tips.append("modifié")
    second = build_daily_content("2025-01-05", catalogs=catalogs, config=config)
    assert second.energy.tips == original_tips
    assert "modifié" not in catalogs.energy[0].tips
    assert second.model_dump(mode="json")["energy"]["tips"] == list(original_tips)
