"""Dépendances partagées pour les routes de l'API.

Les routes reçoivent le service et la configuration via `Depends`, ce qui permet aux tests de
les remplacer par `app.dependency_overrides` sans toucher au conteneur global.
"""

from spirithub.core.container import container
from spirithub.domain.entities import DailyConfig
from spirithub.domain.services import DailyContentService


def get_daily_service() -> DailyContentService:
    return container.daily_service


def get_daily_config() -> DailyConfig:
    return container.daily_config
