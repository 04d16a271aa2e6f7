"""
Dépôts des sélections du jour hors SQL.

- `InMemoryDailyPickRepo`: dict protégé par un verrou (dev/tests, déploiement mono-processus).
- `RedisDailyPickRepo`: une clé `daily-pick:{kind}:{date}` posée avec SET NX.

Les deux offrent la même interface que `SqlDailyPickRepo`: `insert_if_absent` et `get`.
"""

import json
import threading
from datetime import datetime

import redis

from spirithub.domain.calendar import CalendarDate
from spirithub.domain.entities import DailyPick, InsertOutcome, PickKind
from spirithub.domain.errors import PersistenceUnavailable


class InMemoryDailyPickRepo:
    """Dépôt en mémoire, non persistant; l'unicité (date, kind) est garantie par un verrou."""

    def __init__(self):
        self._db: dict[tuple[str, str], DailyPick] = {}
        self._lock = threading.Lock()

    def insert_if_absent(self, pick: DailyPick) -> InsertOutcome:
        k = (pick.date.isoformat(), pick.kind.value)
        with self._lock:
            if k in self._db:
                return InsertOutcome.CONFLICT
            self._db[k] = pick
        return InsertOutcome.INSERTED

    def get(self, date: CalendarDate, kind: PickKind) -> DailyPick | None:
        with self._lock:
            return self._db.get((date.isoformat(), kind.value))

    def list_for_date(self, date: CalendarDate) -> list[DailyPick]:
        iso = date.isoformat()
        with self._lock:
            picks = [p for (d, _), p in self._db.items() if d == iso]
        return sorted(picks, key=lambda p: p.kind.value)

    def __len__(self) -> int:
        return len(self._db)


class RedisDailyPickRepo:
    """Dépôt des sélections adossé à Redis (clé: `daily-pick:{kind}:{date}`, sans TTL)."""

    def __init__(self, url: str | None = None, client=None):
        """Utilise `client` s'il est fourni, sinon crée un client depuis l'URL."""
        self.client = client or redis.Redis.from_url(url, decode_responses=True)

    @staticmethod
    def _key(date: CalendarDate, kind: PickKind) -> str:
        return f"daily-pick:{kind.value}:{date.isoformat()}"

    def insert_if_absent(self, pick: DailyPick) -> InsertOutcome:
        payload = json.dumps(
            {"catalog_id": pick.catalog_id, "chosen_at": pick.chosen_at.isoformat()}
        )
        try:
            created = self.client.set(self._key(pick.date, pick.kind), payload, nx=True)
        except (redis.ConnectionError, redis.TimeoutError) as exc:
            raise PersistenceUnavailable(str(exc)) from exc
        return InsertOutcome.INSERTED if created else InsertOutcome.CONFLICT

    def get(self, date: CalendarDate, kind: PickKind) -> DailyPick | None:
        try:
            raw = self.client.get(self._key(date, kind))
        except (redis.ConnectionError, redis.TimeoutError) as exc:
            raise PersistenceUnavailable(str(exc)) from exc
        if not raw:
            return None
        data = json.loads(raw)
        return DailyPick(
            date=date,
            kind=kind,
            catalog_id=data["catalog_id"],
            chosen_at=datetime.fromisoformat(data["chosen_at"]),
        )

    def list_for_date(self, date: CalendarDate) -> list[DailyPick]:
        picks = (self.get(date, kind) for kind in PickKind)
        return [p for p in picks if p is not None]
