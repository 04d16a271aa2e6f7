from dataclasses import replace
from datetime import UTC, datetime

import structlog
from pydantic import BaseModel, ConfigDict

from spirithub.app.metrics import DAILY_CONTENT_BUILDS, DAILY_PICK_READS
from spirithub.domain.calendar import CalendarDate, coerce_date, resolve_zone, today
from spirithub.domain.catalog import Catalogs, DreamSymbol
from spirithub.domain.daily_content import DailyContentBundle, build_daily_content
from spirithub.domain.entities import DailyConfig, PickKind
from spirithub.domain.errors import ConfigurationError, PersistenceUnavailable, ValidationError
from spirithub.services.daily_picks import select_catalog_id

log = structlog.get_logger(__name__)


class PickView(BaseModel):
    """Sélection du jour telle que lue par l'API.

    `persisted` est faux lorsque la valeur provient du calcul en direct (ligne absente ou
    stockage injoignable pour la date du jour).
    """

    model_config = ConfigDict(frozen=True)

    date: str
    kind: PickKind
    catalog_id: str
    persisted: bool
    chosen_at: datetime | None = None
    symbol: DreamSymbol | None = None


class DailyContentService:
    """Service métier du contenu du jour.

    Responsabilités:
    - Déterminer « aujourd'hui » dans le fuseau de référence (ou un fuseau fourni).
    - Composer le `DailyContentBundle` via `build_daily_content`.
    - Lire les sélections persistées avec repli sur le calcul en direct pour aujourd'hui.
    """

    def __init__(self, catalogs: Catalogs, config: DailyConfig, store):
        """Paramètres:
        - catalogs: catalogues chargés au démarrage.
        - config: paramètres de calcul validés.
        - store: dépôt des `DailyPick` (SQL, Redis ou mémoire).
        """
        self.catalogs = catalogs
        self.config = config
        self.store = store

    def _config_for(self, tz_override: str | None) -> DailyConfig:
        if not tz_override:
            return self.config
        try:
            zone = resolve_zone(tz_override)
        except ConfigurationError as err:
            raise ValidationError(f"unknown timezone: {tz_override!r}") from err
        return replace(self.config, zone=zone)

    def today(self, now: datetime | None = None) -> CalendarDate:
        return today(self.config.zone, now)

    def get_daily_content(
        self,
        tz_override: str | None = None,
        birth_date=None,
        *,
        day=None,
        now: datetime | None = None,
    ) -> DailyContentBundle:
        """Contenu du jour pour `day` (par défaut aujourd'hui dans le fuseau effectif)."""
        config = self._config_for(tz_override)
        target = coerce_date(day) if day is not None else today(config.zone, now)
        bundle = build_daily_content(
            target, birth_date, catalogs=self.catalogs, config=config
        )
        DAILY_CONTENT_BUILDS.labels(str(birth_date is not None).lower()).inc()
        return bundle

    def live_pick(self, day: CalendarDate, kind: PickKind) -> PickView:
        catalog_id = select_catalog_id(day, kind, self.catalogs, self.config)
        return self._view(day, kind, catalog_id, persisted=False)

    def _view(self, day, kind, catalog_id, *, persisted, chosen_at=None) -> PickView:
        symbol = self.catalogs.dreams.by_slug(catalog_id) if kind is PickKind.DAILY_DREAM else None
        return PickView(
            date=day.isoformat(),
            kind=kind,
            catalog_id=catalog_id,
            persisted=persisted,
            chosen_at=chosen_at,
            symbol=symbol,
        )

    def get_persisted_pick(
        self,
        day,
        kind: PickKind = PickKind.DAILY_DREAM,
        *,
        now: datetime | None = None,
    ) -> PickView | None:
        """Sélection persistée pour (day, kind).

        Retour:
        - la ligne persistée si elle existe;
        - le calcul en direct si `day` est aujourd'hui et que la ligne manque ou que le
          stockage est injoignable;
        - None pour une autre date sans ligne.
        Lève PersistenceUnavailable pour une autre date quand le stockage est injoignable.
        """
        target = coerce_date(day)
        is_today = target == self.today(now or datetime.now(UTC))
        try:
            pick = self.store.get(target, kind)
        except PersistenceUnavailable:
            if not is_today:
                raise
            log.warning("daily_pick_read_fallback", date=str(target), kind=kind.value)
            pick = None
        if pick is not None:
            DAILY_PICK_READS.labels(kind.value, "persisted").inc()
            return self._view(
                target, kind, pick.catalog_id, persisted=True, chosen_at=pick.chosen_at
            )
        if is_today:
            DAILY_PICK_READS.labels(kind.value, "live").inc()
            return self.live_pick(target, kind)
        return None

    def get_persisted_dream_pick(self, day, *, now: datetime | None = None) -> PickView | None:
        return self.get_persisted_pick(day, PickKind.DAILY_DREAM, now=now)
