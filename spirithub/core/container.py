"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, catalogues, dépôt des sélections, service du
contenu du jour) et expose un singleton `container` utilisé par le reste de l'application.
Toute erreur de configuration (fuseau, catalogue vide) survient ici, au démarrage.
"""

import structlog

from spirithub.core.settings import Settings, get_settings
from spirithub.domain.calendar import resolve_zone
from spirithub.domain.entities import DailyConfig
from spirithub.domain.services import DailyContentService
from spirithub.infra.content_repo import JSONCatalogRepository
from spirithub.infra.repo.daily_pick_repo import SqlDailyPickRepo
from spirithub.infra.repo.db import create_schema, get_engine
from spirithub.infra.repositories import InMemoryDailyPickRepo, RedisDailyPickRepo

log = structlog.get_logger(__name__)


def build_daily_config(settings: Settings) -> DailyConfig:
    """Traduit les settings validés en paramètres de calcul du domaine."""
    return DailyConfig(
        zone=resolve_zone(settings.REFERENCE_TZ),
        multiplier=settings.SELECTOR_MULTIPLIER,
        cycles={
            "physical": settings.BIORHYTHM_PHYSICAL_DAYS,
            "emotional": settings.BIORHYTHM_EMOTIONAL_DAYS,
            "intellectual": settings.BIORHYTHM_INTELLECTUAL_DAYS,
        },
        critical_threshold=settings.BIORHYTHM_CRITICAL_THRESHOLD,
        max_future_days=settings.BIORHYTHM_MAX_FUTURE_DAYS,
        lunar_epoch=settings.LUNAR_EPOCH,
        lunar_cycle_days=settings.LUNAR_CYCLE_DAYS,
        oracle_catalog_size=settings.ORACLE_CATALOG_SIZE,
        dream_catalog_size=settings.DREAM_CATALOG_SIZE,
    )


def build_pick_store(settings: Settings):
    """Choisit le dépôt des sélections: SQL, Redis ou mémoire.

    En mode `auto`: DATABASE_URL, sinon REDIS_URL, sinon mémoire.
    """
    backend = settings.DAILY_PICK_STORE
    if backend == "auto":
        if settings.DATABASE_URL:
            backend = "sql"
        elif settings.REDIS_URL:
            backend = "redis"
        else:
            backend = "memory"
    if backend == "sql":
        engine = get_engine(settings.DATABASE_URL)
        if engine.dialect.name == "sqlite":
            create_schema(engine)
        return SqlDailyPickRepo(engine), "sql"
    if backend == "redis":
        return RedisDailyPickRepo(settings.REDIS_URL or "redis://localhost:6379/0"), "redis"
    return InMemoryDailyPickRepo(), "memory"


class Container:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.catalog_repo = JSONCatalogRepository(self.settings.CATALOG_DIR)
        self.catalogs = self.catalog_repo.load_all()
        self.daily_config = build_daily_config(self.settings)
        self.pick_store, self.storage_backend = build_pick_store(self.settings)
        self.daily_service = DailyContentService(
            catalogs=self.catalogs, config=self.daily_config, store=self.pick_store
        )
        log.info(
            "container_ready",
            zone=self.daily_config.zone.key,
            storage=self.storage_backend,
        )


container = Container()
