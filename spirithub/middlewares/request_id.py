"""Middleware Starlette pour ajouter et propager un identifiant de requête.

L'identifiant (en-tête X-Request-ID, généré s'il manque) est renvoyé sur la réponse, posé sur
`request.state.trace_id` pour les enveloppes d'erreur et lié au contexte structlog de la requête.
"""

from collections.abc import Callable
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Ajoute un identifiant unique à chaque requête HTTP."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID") -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request, call_next: Callable):
        request_id = request.headers.get(self.header_name) or str(uuid4())
        request.state.trace_id = request_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        response.headers[self.header_name] = request_id
        return response
