"""Dépôt de catalogues basé sur fichiers JSON.

Charge depuis un répertoire les trois tables de correspondance consommées par le contenu du
jour: `oracle.json`, `dream_symbols.json` et `energy.json` (une liste d'objets par fichier).
"""

import json
import os

import pydantic
import structlog

from spirithub.domain.catalog import (
    Catalog,
    Catalogs,
    DreamSymbol,
    OracleMessage,
    PlanetaryDay,
)
from spirithub.domain.errors import ConfigurationError

log = structlog.get_logger(__name__)

ORACLE_FILE = "oracle.json"
DREAMS_FILE = "dream_symbols.json"
ENERGY_FILE = "energy.json"


class JSONCatalogRepository:
    """Dépôt de catalogues en lecture seule.

    L'ordre des symboles de rêves est fixé par tri sur le slug, celui de l'énergie par jour de
    la semaine: les index sélectionnés ne dépendent donc pas de l'ordre du fichier. Une erreur
    de lecture ou de schéma est une `ConfigurationError` (fatale au démarrage).
    """

    def __init__(self, directory: str):
        """Paramètres:
        - directory: répertoire contenant les trois fichiers JSON.
        """
        self.directory = directory

    def _read(self, filename: str) -> list[dict]:
        path = os.path.join(self.directory, filename)
        if not os.path.exists(path):
            raise ConfigurationError(f"catalog file not found: {path}")
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"catalog file is not valid JSON: {path}") from exc
        if not isinstance(data, list):
            raise ConfigurationError(f"catalog file must contain a list: {path}")
        return data

    def _parse(self, filename: str, model):
        try:
            return [model.model_validate(item) for item in self._read(filename)]
        except pydantic.ValidationError as exc:
            raise ConfigurationError(f"invalid entry in {filename}: {exc}") from exc

    def load_oracle(self) -> Catalog[OracleMessage]:
        return Catalog("oracle", self._parse(ORACLE_FILE, OracleMessage))

    def load_dreams(self) -> Catalog[DreamSymbol]:
        symbols = sorted(self._parse(DREAMS_FILE, DreamSymbol), key=lambda s: s.slug)
        slugs = [s.slug for s in symbols]
        if len(set(slugs)) != len(slugs):
            raise ConfigurationError("dream symbol slugs must be unique")
        return Catalog("dreams", symbols)

    def load_energy(self) -> Catalog[PlanetaryDay]:
        days = sorted(self._parse(ENERGY_FILE, PlanetaryDay), key=lambda d: d.weekday)
        if [d.weekday for d in days] != list(range(7)):
            raise ConfigurationError("energy catalog must define each weekday 0-6 exactly once")
        return Catalog("energy", days)

    def load_all(self) -> Catalogs:
        catalogs = Catalogs(
            oracle=self.load_oracle(),
            dreams=self.load_dreams(),
            energy=self.load_energy(),
        )
        log.info(
            "catalogs_loaded",
            directory=self.directory,
            oracle=len(catalogs.oracle),
            dreams=len(catalogs.dreams),
            energy=len(catalogs.energy),
        )
        return catalogs
