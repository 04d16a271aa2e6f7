"""Constantes HTTP pour éviter les valeurs magiques dans le code."""

HTTP_OK = 200
HTTP_NOT_FOUND = 404
HTTP_UNPROCESSABLE_ENTITY = 422
HTTP_INTERNAL_SERVER_ERROR = 500
HTTP_SERVICE_UNAVAILABLE = 503

# Fenêtre par défaut de /biorhythm/critical-days (jours)
DEFAULT_CRITICAL_DAYS_WINDOW = 30
