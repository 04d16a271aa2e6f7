"""Taxonomie des erreurs du domaine « contenu du jour ».

- `ValidationError`: entrée invalide (date de naissance, nombre non positif, catalogue vide).
- `ConfigurationError`: fuseau ou catalogue mal configuré, fatal au démarrage.
- `PersistenceConflict`: course bénigne sur `insert_if_absent`, jamais remontée à l'appelant.
- `PersistenceUnavailable`: stockage injoignable pendant un tick planifié.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base commune des erreurs métier."""

    code = "domain_error"


class ValidationError(DomainError, ValueError):
    """Entrée invalide fournie par l'appelant; jamais convertie en valeur par défaut."""

    code = "validation_error"


class ConfigurationError(DomainError):
    """Configuration invalide (fuseau, catalogue). Non rejouable."""

    code = "configuration_error"


class PersistenceConflict(DomainError):
    """Une ligne existe déjà pour la clé (date, type)."""

    code = "persistence_conflict"

    def __init__(self, key: str) -> None:
        super().__init__(f"daily pick already exists: {key}")
        self.key = key


class PersistenceUnavailable(DomainError):
    """Le stockage ne répond pas; le prochain tick retentera."""

    code = "persistence_unavailable"
