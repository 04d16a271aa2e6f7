"""Tests des calculs numérologiques (réduction, nombre du jour, chemin de vie, destin)."""

from __future__ import annotations

import pytest

from spirithub.domain.calendar import CalendarDate
from spirithub.domain.errors import ValidationError
from spirithub.domain.numerology import (
    MASTER_NUMBERS,
    VALID_NUMBERS,
    compatibility,
    daily_number,
    destiny_number,
    letter_value,
    life_path,
    reduce_to_digit,
)

MASTER_11 = 11
MASTER_22 = 22
MASTER_33 = 33


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1, 1),
        (9, 9),
        (10, 1),
        (11, MASTER_11),
        (22, MASTER_22),
        (33, MASTER_33),
        (29, MASTER_11),
        (38, MASTER_11),
        (99, 9),
        (1985, 5),
        (2025, 9),
    ],
)
def test_reduce_to_digit(value: int, expected: int) -> None:
    assert reduce_to_digit(value) == expected


def test_reduce_is_idempotent_and_in_range() -> None:
    for n in range(1, 5000):
        r = reduce_to_digit(n)
        assert r in VALID_NUMBERS
        assert reduce_to_digit(r) == r


@pytest.mark.parametrize("bad", [0, -7, 3.5, "12", True, None])
def test_reduce_rejects_non_positive_integers(bad) -> None:
    with pytest.raises(ValidationError):
        reduce_to_digit(bad)


def test_daily_number() -> None:
    # 1 + 1 + reduce(2025)=9 -> 11, nombre maître conservé
    assert daily_number(CalendarDate(2025, 1, 1)) == MASTER_11
    # 15 + 3 + reduce(2024)=8 -> 26 -> 8
    assert daily_number("2024-03-15") == 8


def test_life_path() -> None:
    # reduce(15)=6 + 7 + reduce(1990)=1 -> 14 -> 5
    assert life_path("1990-07-15") == 5
    assert life_path(CalendarDate(1990, 7, 15)) == life_path("1990-07-15")


def test_destiny_number_uses_pythagorean_values() -> None:
    # A=1 N=5 A=1
    assert destiny_number("Ana") == 7
    # I=9 O=6 N=5 -> 20 -> 2
    assert destiny_number("Ion") == 2


def test_destiny_number_diacritics_match_base_letters() -> None:
    assert letter_value("ș") == letter_value("s")
    assert letter_value("Ă") == letter_value("A")
    assert destiny_number("Ștefan") == destiny_number("Stefan")


def test_destiny_number_rejects_empty_names() -> None:
    with pytest.raises(ValidationError):
        destiny_number("   ")
    with pytest.raises(ValidationError):
        destiny_number("1234 !")


@pytest.mark.parametrize(
    ("a", "b", "score"),
    [
        (7, 7, 100),
        (11, 22, 90),
        (11, 2, 95),
        (4, 22, 95),
        (1, 2, 85),
        (5, 7, 85),
        (1, 8, 30),
        (3, 4, 60),
        (11, 5, 55),
    ],
)
def test_compatibility(a: int, b: int, score: int) -> None:
    assert compatibility(a, b) == score
    assert compatibility(b, a) == score


def test_compatibility_rejects_invalid_numbers() -> None:
    with pytest.raises(ValidationError):
        compatibility(10, 1)
    with pytest.raises(ValidationError):
        compatibility(0, 1)
    assert MASTER_NUMBERS <= VALID_NUMBERS
