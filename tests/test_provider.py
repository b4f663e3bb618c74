"""Tests for TracerProvider construction and span logging."""

import logging

from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider

from sqstrace.config import validate_config
from sqstrace.exporter import build_otlp_exporter
from sqstrace.instrumentation import Instrumentation
from sqstrace.processors import LoggingSpanProcessor
from sqstrace.tracer import build_tracer_provider

from tests.conftest import XRAY_HEADER


def test_default_provider():
    provider = build_tracer_provider()
    assert isinstance(provider, TracerProvider)
    provider.shutdown()


def test_service_name_resource():
    provider = build_tracer_provider(validate_config({"tracing": {"service_name": "orders-worker"}}))
    assert provider.resource.attributes[SERVICE_NAME] == "orders-worker"
    provider.shutdown()


def test_otlp_exporter():
    exporter = build_otlp_exporter("http://localhost:4318/v1/traces", {"x-api-key": "k"})
    assert isinstance(exporter, OTLPSpanExporter)
    exporter.shutdown()


def test_otlp_provider():
    cfg = validate_config({"exporters": {"use_otlp": True, "endpoint": "http://localhost:4318/v1/traces"}})
    provider = build_tracer_provider(cfg)
    assert isinstance(provider, TracerProvider)
    provider.shutdown()


def test_log_spans(caplog):
    provider = build_tracer_provider(validate_config({"logging": {"log_spans": True}}))
    instrumentation = Instrumentation(tracer=provider.get_tracer("test"))

    with caplog.at_level(logging.INFO, logger="sqstrace.spans"):
        record = {"messageId": "m-1", "eventSource": "queue_1", "attributes": {"AWSTraceHeader": XRAY_HEADER}}
        instrumentation.start_message_span(record).end()

    messages = [r.getMessage() for r in caplog.records if r.name == "sqstrace.spans"]
    assert len(messages) == 1
    assert "name=queue_1 process" in messages[0]
    assert "kind=CONSUMER" in messages[0]
    assert "links=1" in messages[0]
    provider.shutdown()


def test_logging_processor_custom_logger(tracer_provider, caplog):
    logger = logging.getLogger("custom.spans")
    tracer_provider.add_span_processor(LoggingSpanProcessor(logger))

    with caplog.at_level(logging.INFO, logger="custom.spans"):
        tracer_provider.get_tracer("test").start_span("work").end()

    assert any(r.name == "custom.spans" and "name=work" in r.getMessage() for r in caplog.records)
