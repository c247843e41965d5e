"""
OpenTelemetry instrumentation setup.

Configures distributed tracing for the service and exposes the Prometheus
metrics endpoint.
"""

import logging
import os

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.django import DjangoInstrumentor
from opentelemetry.instrumentation.psycopg2 import Psycopg2Instrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import start_http_server

logger = logging.getLogger(__name__)


def setup_opentelemetry():
    """
    Configure OpenTelemetry instrumentation.

    Sets up:
    - Distributed tracing (exported via OTLP)
    - Auto-instrumentation for Django and PostgreSQL
    - Prometheus metrics server
    """
    if os.environ.get("OTEL_SDK_DISABLED", "false").lower() == "true":
        logger.info("OpenTelemetry disabled, skipping instrumentation setup")
        return

    resource = Resource.create(
        {
            "service.name": os.environ.get("OTEL_SERVICE_NAME", "instance-license"),
            "service.version": os.environ.get("OTEL_SERVICE_VERSION", "1.0.0"),
            "deployment.environment": os.environ.get("ENVIRONMENT", "development"),
        }
    )

    trace_provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(trace_provider)

    otlp_endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT", "http://tempo:4317")
    otlp_exporter = OTLPSpanExporter(
        endpoint=otlp_endpoint,
        insecure=os.environ.get("OTEL_EXPORTER_OTLP_INSECURE", "true").lower() == "true",
    )
    trace_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    DjangoInstrumentor().instrument()
    Psycopg2Instrumentor().instrument()

    prometheus_port = int(os.environ.get("PROMETHEUS_PORT", "9090"))
    try:
        start_http_server(prometheus_port, addr="0.0.0.0")
        logger.info("Prometheus metrics server started on 0.0.0.0:%s", prometheus_port)
    except OSError as e:
        # Another process of this deployment already serves the port
        logger.warning("Could not start Prometheus metrics server: %s", e)

    logger.info("OpenTelemetry instrumentation configured")


def get_tracer(name: str) -> trace.Tracer:
    """
    Get a tracer instance for manual instrumentation.

    Without a configured provider the API returns a no-op tracer.

    Args:
        name: Tracer name (usually module name)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)
