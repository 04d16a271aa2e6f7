"""
Numérologie: réduction à un chiffre (racine numérique) et nombres dérivés.

Règle de réduction
------------------
On somme les chiffres décimaux tant que le résultat n'est ni un chiffre (1-9) ni un nombre
maître (11, 22, 33). L'arrêt sur nombre maître s'applique à chaque passe, y compris sur les
sommes intermédiaires: 29 → 11, 38 → 11, 1985 → 23 → 5.
"""

from __future__ import annotations

import unicodedata
from datetime import date

from spirithub.domain.calendar import CalendarDate, coerce_date
from spirithub.domain.errors import ValidationError

MASTER_NUMBERS: frozenset[int] = frozenset({11, 22, 33})
VALID_NUMBERS: frozenset[int] = frozenset(range(1, 10)) | MASTER_NUMBERS

# Système pythagoricien: A=1 ... I=9, J=1 ... R=9, S=1 ... Z=8.
_LETTER_VALUES: dict[str, int] = {chr(ord("A") + i): (i % 9) + 1 for i in range(26)}
# Les diacritiques roumaines prennent la valeur de leur lettre de base (ș → s, ă → a, ...).
_ROMANIAN_EXTRA = {"Ă": "A", "Â": "A", "Î": "I", "Ș": "S", "Ş": "S", "Ț": "T", "Ţ": "T"}

_MASTER_ROOTS = {11: 2, 22: 4, 33: 6}
_COMPLEMENTARY = {
    frozenset(p)
    for p in [(1, 2), (1, 5), (1, 7), (2, 4), (2, 6), (2, 8), (3, 6), (3, 9), (4, 8), (5, 7)]
}
_CHALLENGING = {frozenset((1, 8))}


def reduce_to_digit(n: int) -> int:
    """Réduit un entier positif à 1-9 ou à un nombre maître (11, 22, 33).

    Lève `ValidationError` pour 0, les négatifs et tout ce qui n'est pas un entier.
    """
    if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
        raise ValidationError("digit reduction is defined for positive integers only")
    while n > 9 and n not in MASTER_NUMBERS:
        n = sum(int(d) for d in str(n))
    return n


def letter_value(letter: str) -> int:
    """Valeur numérologique d'une lettre (0 pour tout autre caractère)."""
    upper = letter.upper()
    upper = _ROMANIAN_EXTRA.get(upper, upper)
    if upper not in _LETTER_VALUES:
        # lettres accentuées hors alphabet roumain: on retombe sur la lettre de base
        base = unicodedata.normalize("NFKD", upper)[:1]
        return _LETTER_VALUES.get(base, 0)
    return _LETTER_VALUES[upper]


def daily_number(day: CalendarDate | date | str) -> int:
    """Nombre universel du jour: jour + mois + année réduite, puis réduction."""
    d = coerce_date(day)
    return reduce_to_digit(d.day + d.month + reduce_to_digit(d.year))


def life_path(birth_date: CalendarDate | date | str) -> int:
    """Chemin de vie: jour, mois et année réduits séparément, sommés puis réduits."""
    d = coerce_date(birth_date)
    total = reduce_to_digit(d.day) + reduce_to_digit(d.month) + reduce_to_digit(d.year)
    return reduce_to_digit(total)


def destiny_number(name: str) -> int:
    """Nombre du destin à partir du nom complet (alphabet roumain, diacritiques incluses)."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("name cannot be empty")
    total = sum(letter_value(ch) for ch in name.strip())
    if total == 0:
        raise ValidationError("name must contain at least one letter")
    return reduce_to_digit(total)


def validate_number(n: int) -> int:
    if n not in VALID_NUMBERS or isinstance(n, bool):
        raise ValidationError("numerology number must be 1-9 or a master number (11, 22, 33)")
    return n


def compatibility(first: int, second: int) -> int:
    """Score de compatibilité (0-100) entre deux nombres numérologiques."""
    a, b = validate_number(first), validate_number(second)
    if a == b:
        return 100
    a_master, b_master = a in MASTER_NUMBERS, b in MASTER_NUMBERS
    if a_master and b_master:
        return 90
    if (a_master and _MASTER_ROOTS[a] == b) or (b_master and _MASTER_ROOTS[b] == a):
        return 95
    pair = frozenset((a, b))
    if pair in _COMPLEMENTARY:
        return 85
    if pair in _CHALLENGING:
        return 30
    if not (a_master or b_master):
        return 60
    return 55
