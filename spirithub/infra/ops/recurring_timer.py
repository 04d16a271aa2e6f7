"""Minuterie récurrente à thread unique pour déclencher un handler sans Celery.

Utilisée en déploiement mono-processus et dans les tests: `RecurringTimer(3600, handler)`
appelle `handler()` toutes les `interval` secondes jusqu'à `stop()`. Une exception du handler
est journalisée et n'arrête pas la minuterie; le tick suivant a lieu normalement.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

import structlog

log = structlog.get_logger(__name__)


class RecurringTimer:
    """Appelle `handler` périodiquement dans un thread démon.

    Paramètres:
    - interval: secondes entre deux ticks (> 0).
    - handler: fonction sans argument.
    - run_immediately: effectue un premier tick dès le démarrage (rattrapage au boot).
    """

    def __init__(
        self,
        interval: float,
        handler: Callable[[], object],
        *,
        run_immediately: bool = True,
        name: str = "daily-pick-timer",
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.handler = handler
        self.run_immediately = run_immediately
        self.name = name
        self.ticks = 0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> None:
        """Exécute le handler une fois; ses erreurs sont journalisées, jamais propagées."""
        try:
            self.handler()
        except Exception:
            log.exception("recurring_timer_tick_failed", timer=self.name)
        finally:
            self.ticks += 1

    def _run(self) -> None:
        if self.run_immediately and not self._stop.is_set():
            self.tick()
        while not self._stop.wait(self.interval):
            self.tick()

    def start(self) -> RecurringTimer:
        with self._lock:
            if self.running:
                return self
            self._stop.clear()
            self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
            self._thread.start()
        log.info("recurring_timer_started", timer=self.name, interval=self.interval)
        return self

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        with self._lock:
            thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        log.info("recurring_timer_stopped", timer=self.name, ticks=self.ticks)

    def __enter__(self) -> RecurringTimer:
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.stop()
