"""
OpenTelemetry instrumentation setup.

This module configures OpenTelemetry for distributed tracing.
Without ``setup_opentelemetry`` the API's default no-op tracer
provider is active, so spans cost nothing in tests.
"""

import logging
import os

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode  # noqa: F401

logger = logging.getLogger(__name__)


def setup_opentelemetry():
    """
    Configure OpenTelemetry tracing.

    Spans are exported over OTLP when ``OTEL_EXPORTER_OTLP_ENDPOINT`` is
    set; otherwise the no-op provider stays in place.
    """
    otlp_endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT")
    if not otlp_endpoint:
        logger.info("OTEL_EXPORTER_OTLP_ENDPOINT not set, tracing disabled")
        return

    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
    from opentelemetry.instrumentation.django import DjangoInstrumentor
    from opentelemetry.instrumentation.psycopg2 import Psycopg2Instrumentor
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor

    resource = Resource.create(
        {
            "service.name": os.environ.get("OTEL_SERVICE_NAME", "niyyah-activation"),
            "service.version": os.environ.get("OTEL_SERVICE_VERSION", "1.0.0"),
            "deployment.environment": os.environ.get("ENVIRONMENT", "development"),
        }
    )

    trace_provider = TracerProvider(resource=resource)
    trace_provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
    )
    trace.set_tracer_provider(trace_provider)
    DjangoInstrumentor().instrument()
    Psycopg2Instrumentor().instrument()

    logger.info("OpenTelemetry tracing exporting to %s", otlp_endpoint)


def get_tracer(name: str):
    """
    Get a tracer instance for manual instrumentation.

    Args:
        name: Tracer name (usually module name)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)
