"""Configuration du tracing OpenTelemetry.

Exporte les traces vers l'endpoint OTLP si `OTLP_ENDPOINT` est configuré; sinon ne fait rien
(le tracer global reste le no-op d'OpenTelemetry).
"""

from __future__ import annotations

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from spirithub.core.settings import Settings


def setup_tracing(settings: Settings) -> bool:
    """Installe le provider OTLP; renvoie True si le tracing a été activé."""
    if not settings.OTLP_ENDPOINT:
        return False
    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: settings.APP_NAME}))
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.OTLP_ENDPOINT, insecure=True))
    )
    trace.set_tracer_provider(provider)
    return True
