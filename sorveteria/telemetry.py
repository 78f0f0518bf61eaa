"""OpenTelemetry configuration for the sorveteria application."""

import os
import sys

from opentelemetry import metrics, trace
from opentelemetry.exporter.prometheus import PrometheusMetricReader
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from prometheus_client import start_http_server

from .logging_config import get_logger

logger = get_logger(__name__)

METRICS_PORT = 8080


def setup_telemetry(app) -> bool:
    """Configure OpenTelemetry tracing and metrics for the FastAPI application.

    Telemetry is opt-in (``ENABLE_TELEMETRY=1``) and never enabled under pytest.

    Returns:
        True if instrumentation was installed
    """
    if not os.getenv("ENABLE_TELEMETRY"):
        return False

    if "pytest" in sys.modules or os.getenv("TESTING"):
        logger.info("Skipping OpenTelemetry setup during tests")
        return False

    try:
        prometheus_reader = PrometheusMetricReader()
        metrics.set_meter_provider(MeterProvider(metric_readers=[prometheus_reader]))

        metrics_port = METRICS_PORT
        try:
            start_http_server(metrics_port)
        except OSError:
            metrics_port += 1
            start_http_server(metrics_port)
        logger.info("Prometheus metrics server started", port=metrics_port)

        tracer_provider = TracerProvider()
        tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        trace.set_tracer_provider(tracer_provider)

        FastAPIInstrumentor.instrument_app(app)
        logger.info("OpenTelemetry tracing and metrics setup completed")
        return True

    except Exception as e:
        # Telemetry must never keep the shop page from starting
        logger.error("Failed to setup OpenTelemetry", error=str(e))
        return False
