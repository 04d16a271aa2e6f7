"""
Script de serveur de développement.

Lance l'API avec un stockage en mémoire par défaut et le tick horaire exécuté dans le processus,
pour tester le contenu du jour en local sans base ni Celery.
"""

import os

# Defaults locaux AVANT l'import de l'application (le conteneur lit les settings à l'import)
os.environ.setdefault("DAILY_PICK_STORE", "memory")
os.environ.setdefault("DAILY_TICK_IN_PROCESS", "true")

import uvicorn  # noqa: E402

from spirithub.app.main import app  # noqa: E402
from spirithub.core.container import container  # noqa: E402


def main():
    """Point d'entrée: sert l'application sur APP_HOST/APP_PORT (PORT prioritaire)."""
    port = int(os.environ.get("PORT", container.settings.APP_PORT))
    uvicorn.run(app, host=container.settings.APP_HOST, port=port, reload=False)


if __name__ == "__main__":
    main()
