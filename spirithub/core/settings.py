"""Définition et chargement des paramètres de configuration applicative.

Objectif du module
------------------
- Centraliser les paramètres (env/.env) via Pydantic Settings
- Résoudre le fichier `.env` à utiliser selon la stratégie: ENV_FILE > .env.{APP_ENV} > .env
- Valider au démarrage ce qui serait fatal plus tard (fuseau de référence, cycles, catalogues)
"""

import os
from datetime import UTC, datetime
from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from spirithub.domain.calendar import resolve_zone
from spirithub.domain.errors import ConfigurationError

# Détermination du fichier .env à utiliser avec priorité:
# 1) ENV_FILE (chemin explicite)
# 2) .env.{APP_ENV} si présent
# 3) .env (défaut)
_cwd = Path.cwd()
_env_file_from_env = os.getenv("ENV_FILE")
if _env_file_from_env:
    _ENV_FILE_PATH = _env_file_from_env
else:
    _app_env = os.getenv("APP_ENV", "dev")
    _candidate_specific = _cwd / f".env.{_app_env}"
    _candidate_default = _cwd / ".env"
    if _candidate_specific.exists():
        _ENV_FILE_PATH = _candidate_specific
    else:
        _ENV_FILE_PATH = _candidate_default

_DEFAULT_CATALOG_DIR = str(Path(__file__).resolve().parent.parent / "infra" / "data")


class Settings(BaseSettings):
    """Modèle de configuration chargé depuis l'environnement et .env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
    )
    APP_NAME: str = "spirithub-daily"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = True
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000

    DATABASE_URL: str | None = None
    REDIS_URL: str | None = None
    # auto: DATABASE_URL > REDIS_URL > mémoire
    DAILY_PICK_STORE: Literal["auto", "sql", "redis", "memory"] = "auto"
    LOG_LEVEL: str = "INFO"
    OTLP_ENDPOINT: str | None = None
    CELERY_BROKER_URL: str = "redis://redis:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://redis:6379/1"

    # Contenu du jour
    REFERENCE_TZ: str = "Europe/Bucharest"
    CATALOG_DIR: str = _DEFAULT_CATALOG_DIR
    ORACLE_CATALOG_SIZE: int | None = None
    DREAM_CATALOG_SIZE: int | None = None
    SELECTOR_MULTIPLIER: int = 31

    # Biorythmes (périodes en jours, seuil critique en %)
    BIORHYTHM_PHYSICAL_DAYS: int = 23
    BIORHYTHM_EMOTIONAL_DAYS: int = 28
    BIORHYTHM_INTELLECTUAL_DAYS: int = 33
    BIORHYTHM_CRITICAL_THRESHOLD: int = 10
    BIORHYTHM_MAX_FUTURE_DAYS: int = 365

    # Lune: nouvelle lune de référence et mois synodique moyen
    LUNAR_EPOCH: datetime = datetime(2000, 1, 6, 18, 14, tzinfo=UTC)
    LUNAR_CYCLE_DAYS: float = 29.53058867

    # Planification: minute de chaque heure à laquelle le tick est déclenché
    DAILY_TICK_MINUTE: int = 0
    DAILY_TICK_INTERVAL_SECONDS: int = 3600
    # Déclenche aussi le tick dans le processus API (déploiement sans Celery beat)
    DAILY_TICK_IN_PROCESS: bool = False

    @field_validator("REFERENCE_TZ")
    @classmethod
    def _check_zone(cls, value: str) -> str:
        resolve_zone(value)
        return value.strip()

    @field_validator("SELECTOR_MULTIPLIER")
    @classmethod
    def _check_multiplier(cls, value: int) -> int:
        if value <= 0 or value % 2 == 0:
            raise ConfigurationError("SELECTOR_MULTIPLIER must be a positive odd integer")
        return value

    @field_validator(
        "BIORHYTHM_PHYSICAL_DAYS", "BIORHYTHM_EMOTIONAL_DAYS", "BIORHYTHM_INTELLECTUAL_DAYS"
    )
    @classmethod
    def _check_cycle(cls, value: int) -> int:
        if value <= 0:
            raise ConfigurationError("biorhythm cycle lengths must be positive")
        return value

    @field_validator("ORACLE_CATALOG_SIZE", "DREAM_CATALOG_SIZE")
    @classmethod
    def _check_catalog_size(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ConfigurationError("catalog sizes must be >= 1")
        return value

    @field_validator("LUNAR_EPOCH")
    @classmethod
    def _epoch_aware(cls, value: datetime) -> datetime:
        return value if value.tzinfo is not None else value.replace(tzinfo=UTC)

    @model_validator(mode="after")
    def _check_schedule(self) -> "Settings":
        if not 0 <= self.DAILY_TICK_MINUTE <= 59:
            raise ConfigurationError("DAILY_TICK_MINUTE must be within 0-59")
        # un tick moins d'une fois par jour laisserait des dates sans sélection
        if not 0 < self.DAILY_TICK_INTERVAL_SECONDS <= 86400:
            raise ConfigurationError("DAILY_TICK_INTERVAL_SECONDS must be within 1-86400")
        if self.LUNAR_CYCLE_DAYS <= 0:
            raise ConfigurationError("LUNAR_CYCLE_DAYS must be positive")
        return self


def get_settings() -> Settings:
    """Construit et retourne la configuration de l'application."""
    return Settings()
