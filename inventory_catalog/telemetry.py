"""OpenTelemetry configuration for the inventory catalog."""

import os
import sys

from opentelemetry import metrics, trace
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from .config import settings
from .logging_config import get_logger

logger = get_logger(__name__)


def setup_telemetry() -> bool:
    """Configure OpenTelemetry tracing and metrics for the catalog.

    Returns:
        True if providers were installed, False if telemetry stayed disabled
    """
    if not settings.enable_telemetry:
        return False

    # Skip telemetry setup during tests to avoid I/O issues
    if "pytest" in sys.modules or os.getenv("TESTING"):
        logger.info("Skipping OpenTelemetry setup during tests")
        return False

    try:
        resource = Resource.create(
            {SERVICE_NAME: settings.app_name, SERVICE_VERSION: settings.version}
        )

        metric_reader = PeriodicExportingMetricReader(ConsoleMetricExporter())
        metrics.set_meter_provider(
            MeterProvider(resource=resource, metric_readers=[metric_reader])
        )

        tracer_provider = TracerProvider(resource=resource)
        tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        trace.set_tracer_provider(tracer_provider)

        logger.info("OpenTelemetry tracing and metrics setup completed")
        return True

    except Exception as e:
        # Don't fail the application if telemetry setup fails
        logger.error(f"Failed to setup OpenTelemetry: {e}")
        return False
