"""Configuration de test pour pytest avec gestion des chemins et fixtures partagées.

Ajoute la racine du projet au sys.path, force un stockage en mémoire et fournit le fuseau de
référence, les catalogues réels et un client HTTP dont le service est isolé par test.
"""

import os
import sys
from zoneinfo import ZoneInfo

import pytest

# Ensure project root is on sys.path so that
# imports like `from spirithub...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Les tests n'utilisent jamais un .env de développeur ni une base externe
os.environ["ENV_FILE"] = os.devnull
os.environ["DAILY_PICK_STORE"] = "memory"
os.environ.pop("DATABASE_URL", None)
os.environ.pop("OTLP_ENDPOINT", None)

from spirithub.domain.entities import DailyConfig  # noqa: E402
from spirithub.infra.content_repo import JSONCatalogRepository  # noqa: E402
from spirithub.infra.repositories import InMemoryDailyPickRepo  # noqa: E402

DATA_DIR = os.path.join(PROJECT_ROOT, "spirithub", "infra", "data")
REFERENCE_TZ = "Europe/Bucharest"


@pytest.fixture(scope="session")
def zone() -> ZoneInfo:
    return ZoneInfo(REFERENCE_TZ)


@pytest.fixture(scope="session")
def catalogs():
    """Catalogues livrés avec l'application (oracle 15, rêves 20, énergie 7)."""
    return JSONCatalogRepository(DATA_DIR).load_all()


@pytest.fixture
def config(zone) -> DailyConfig:
    return DailyConfig(zone=zone)


@pytest.fixture
def store() -> InMemoryDailyPickRepo:
    return InMemoryDailyPickRepo()


@pytest.fixture
def service(catalogs, config, store):
    from spirithub.domain.services import DailyContentService

    return DailyContentService(catalogs=catalogs, config=config, store=store)


@pytest.fixture
def client(service, config):
    """TestClient dont le service et la configuration sont propres au test."""
    from fastapi.testclient import TestClient

    from spirithub.api.deps import get_daily_config, get_daily_service
    from spirithub.app.main import app

    app.dependency_overrides[get_daily_service] = lambda: service
    app.dependency_overrides[get_daily_config] = lambda: config
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
