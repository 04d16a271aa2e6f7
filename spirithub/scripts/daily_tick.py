"""
Script d'exploitation du tick des sélections du jour.

Exécute le tick une fois (comme le ferait Celery beat) ou en boucle via `RecurringTimer`,
et affiche l'issue par type de sélection. `--now` permet de rejouer un instant précis
(ex: une nuit de changement d'heure) contre le stockage configuré.
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from datetime import datetime
from pathlib import Path

# Permet l'exécution du script en direct (python spirithub/scripts/daily_tick.py)
SYS_ROOT = Path(__file__).resolve().parents[2]
if str(SYS_ROOT) not in sys.path:
    sys.path.append(str(SYS_ROOT))

from spirithub.core.container import container  # noqa: E402
from spirithub.core.logging import setup_logging  # noqa: E402
from spirithub.infra.ops.recurring_timer import RecurringTimer  # noqa: E402
from spirithub.services.daily_picks import make_tick_handler, run_tick  # noqa: E402


def _parse_now(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"invalid ISO instant: {value!r}") from err


def main(argv: list[str] | None = None) -> int:
    """Point d'entrée: un tick (par défaut) ou une boucle avec `--loop`."""
    parser = argparse.ArgumentParser(description="Tick des sélections du jour")
    parser.add_argument(
        "--now", type=_parse_now, default=None, help="Instant ISO-8601 (défaut: maintenant)"
    )
    parser.add_argument("--loop", action="store_true", help="Boucle jusqu'à Ctrl+C")
    parser.add_argument(
        "--interval",
        type=float,
        default=float(container.settings.DAILY_TICK_INTERVAL_SECONDS),
        help="Intervalle en secondes en mode boucle",
    )
    args = parser.parse_args(argv)
    setup_logging(container.settings.LOG_LEVEL, container.settings.APP_ENV)

    if args.loop:
        handler = make_tick_handler(
            container.pick_store, container.catalogs, container.daily_config
        )
        with RecurringTimer(args.interval, handler):
            try:
                while True:
                    time.sleep(1)
            except KeyboardInterrupt:
                return 0

    results = run_tick(
        container.pick_store,
        container.catalogs,
        container.daily_config,
        now=args.now,
    )
    print(
        json.dumps(
            [
                {
                    "date": r.date.isoformat(),
                    "kind": r.kind.value,
                    "outcome": r.outcome,
                    "catalog_id": r.catalog_id,
                }
                for r in results
            ],
            ensure_ascii=False,
            indent=2,
        )
    )
    return 0 if all(r.outcome != "unavailable" for r in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
