"""TracerProvider construction from sqstrace configuration."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)

from sqstrace.config import SqsTraceConfig
from sqstrace.exporter import build_otlp_exporter
from sqstrace.processors.logging_processor import LoggingSpanProcessor

logger = logging.getLogger(__name__)


def build_resource(config: SqsTraceConfig) -> Resource:
    attributes: Dict[str, str] = {}
    if config.tracing.service_name:
        attributes[SERVICE_NAME] = config.tracing.service_name
    return Resource.create(attributes)


def build_tracer_provider(config: Optional[SqsTraceConfig] = None) -> TracerProvider:
    """
    Build an SDK TracerProvider with the exporters enabled in ``config``.

    The console exporter uses a simple (synchronous) processor for immediate
    output; OTLP export is batched.
    """
    config = config or SqsTraceConfig()
    provider = TracerProvider(resource=build_resource(config))

    exporters = config.exporters
    if exporters.enable_console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    if exporters.use_otlp:
        provider.add_span_processor(
            BatchSpanProcessor(
                build_otlp_exporter(exporters.endpoint, exporters.headers, exporters.timeout)
            )
        )
        logger.debug(f"OTLP export enabled, endpoint: {exporters.endpoint}")
    if config.logging.log_spans:
        provider.add_span_processor(LoggingSpanProcessor())

    return provider
