"""Shared fixtures: an in-memory span pipeline and offline SQS clients."""

import os

import boto3
import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123456789012/queue_1"
QUEUE_ARN = "arn:aws:sqs:us-east-1:123456789012:queue_1"
XRAY_HEADER = "Root=1-abcdef12-1234567890abcdef12345678;Parent=1234567890abcdef;Sampled=1"

AWS_TEST_CREDENTIALS = {
    "region_name": "us-east-1",
    "aws_access_key_id": "testing",
    "aws_secret_access_key": "testing",
}


@pytest.fixture
def exporter():
    return InMemorySpanExporter()


@pytest.fixture
def tracer_provider(exporter):
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    yield provider
    provider.shutdown()


@pytest.fixture
def tracer(tracer_provider):
    return tracer_provider.get_tracer("test")


@pytest.fixture
def sqs_client():
    return boto3.client("sqs", **AWS_TEST_CREDENTIALS)


@pytest.fixture
def boto3_session():
    return boto3.Session(**AWS_TEST_CREDENTIALS)


@pytest.fixture(autouse=True)
def _clean_env():
    """Drop SQSTRACE_* variables a test may have set."""
    yield
    for key in list(os.environ):
        if key.startswith("SQSTRACE_"):
            del os.environ[key]
