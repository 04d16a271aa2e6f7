"""
Catalogues de contenus (messages de l'oracle, symboles de rêves, jours planétaires).

Les catalogues sont fournis de l'extérieur et traités comme des tables de correspondance
opaques. Ici ils deviennent des tableaux indexés de taille fixe avec un élément de repli
documenté: un index hors bornes renvoie le repli, jamais d'exception.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from spirithub.domain.errors import ConfigurationError, ValidationError

_DIACRITICS = str.maketrans(
    {
        "ă": "a",
        "â": "a",
        "î": "i",
        "ș": "s",
        "ş": "s",
        "ț": "t",
        "ţ": "t",
        "Ă": "A",
        "Â": "A",
        "Î": "I",
        "Ș": "S",
        "Ş": "S",
        "Ț": "T",
        "Ţ": "T",
    }
)


def normalize_diacritics(text: str) -> str:
    """Remplace les diacritiques roumaines par leur lettre de base."""
    return text.translate(_DIACRITICS)


def generate_slug(name: str) -> str:
    """Slug URL à partir d'un nom roumain ("Șarpe veninos" → "sarpe-veninos")."""
    if not name or not name.strip():
        raise ValidationError("symbol name cannot be empty")
    slug = normalize_diacritics(name).lower()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


class _Entry(BaseModel):
    model_config = ConfigDict(frozen=True)


class OracleMessage(_Entry):
    """Message inspirant du jour."""

    id: int
    slug: str
    title: str
    category: str = "general"
    icon: str = "sparkles"
    insight: str
    action: str = ""
    mantra: str = ""


class DreamSymbol(_Entry):
    """Symbole du dictionnaire des rêves."""

    name: str
    slug: str = ""
    category: str
    short_meaning: str
    interpretation: str = ""

    @model_validator(mode="before")
    @classmethod
    def _fill_slug(cls, data):
        if isinstance(data, dict) and not data.get("slug") and data.get("name"):
            data = {**data, "slug": generate_slug(data["name"])}
        return data


class PlanetaryDay(_Entry):
    """Énergie du jour selon la planète gouvernant le jour de la semaine (0 = dimanche)."""

    weekday: int = Field(ge=0, le=6)
    day_name: str
    planet: str
    planet_symbol: str = ""
    theme: str
    dominant_energy: str = ""
    energy_level: int = Field(default=50, ge=0, le=100)
    color: str = "#FBBF24"
    hint: str = ""
    description: str = ""
    tips: tuple[str, ...] = ()
    embrace: tuple[str, ...] = ()
    avoid: tuple[str, ...] = ()


T = TypeVar("T", bound=BaseModel)


class Catalog(Generic[T]):
    """Tableau immuable d'entrées, adressé par index ou par slug.

    `catalog[i]` hors bornes renvoie `fallback` (par défaut la première entrée).
    """

    def __init__(self, name: str, entries: Iterable[T], fallback: T | None = None) -> None:
        self.name = name
        self._entries: tuple[T, ...] = tuple(entries)
        if not self._entries:
            raise ConfigurationError(f"catalog {name!r} is empty")
        self.fallback: T = fallback if fallback is not None else self._entries[0]
        self._by_slug = {e.slug: e for e in self._entries if getattr(e, "slug", None)}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> T:
        if isinstance(index, bool) or not isinstance(index, int):
            return self.fallback
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return self.fallback

    def by_slug(self, slug: str) -> T | None:
        return self._by_slug.get(slug)


@dataclass(frozen=True)
class Catalogs:
    """Jeu de catalogues consommé par l'agrégateur et le planificateur."""

    oracle: Catalog
    dreams: Catalog
    energy: Catalog


DREAM_SEARCH_MIN_CHARS = 2
DREAM_SEARCH_DEFAULT_LIMIT = 20
DREAM_SEARCH_MAX_LIMIT = 50


def search_dreams(
    dreams: Catalog,
    query: str,
    category: str | None = None,
    limit: int | None = DREAM_SEARCH_DEFAULT_LIMIT,
) -> list[DreamSymbol]:
    """Recherche de symboles par nom, insensible à la casse et aux diacritiques.

    - requête de moins de 2 caractères (après strip): aucun résultat;
    - `category` filtre par égalité stricte;
    - `limit` vaut 20 par défaut (0 ou None aussi) et est plafonné à 50;
    - les noms commençant par la requête passent devant, puis l'ordre du catalogue (slug).
    """
    needle = normalize_diacritics((query or "").strip()).lower()
    if len(needle) < DREAM_SEARCH_MIN_CHARS:
        return []
    size = min(limit or DREAM_SEARCH_DEFAULT_LIMIT, DREAM_SEARCH_MAX_LIMIT)
    prefix: list[DreamSymbol] = []
    inner: list[DreamSymbol] = []
    for symbol in dreams:
        if category and symbol.category != category:
            continue
        name = normalize_diacritics(symbol.name).lower()
        if name.startswith(needle):
            prefix.append(symbol)
        elif needle in name:
            inner.append(symbol)
    return (prefix + inner)[:size]
