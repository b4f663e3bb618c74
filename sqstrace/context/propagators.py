"""AWS X-Ray trace header propagation using OpenTelemetry's standard propagators."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from opentelemetry.context import Context
from opentelemetry.propagators.aws.aws_xray_propagator import (
    TRACE_HEADER_KEY,
    AwsXRayPropagator,
)
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.trace import SpanContext, get_current_span

from sqstrace.context.carrier import ScalarCarrier

logger = logging.getLogger(__name__)

# System attribute SQS uses to carry the X-Ray trace header
TRACE_HEADER_ATTRIBUTE = "AWSTraceHeader"

# Attribute names checked on received messages, in order
TRACE_HEADER_LOOKUP_KEYS = (TRACE_HEADER_ATTRIBUTE, TRACE_HEADER_KEY)

_propagator = AwsXRayPropagator()


def get_default_propagator() -> TextMapPropagator:
    """Return the process-wide X-Ray propagator."""
    return _propagator


def format_trace_header(
    context: Optional[Context] = None,
    propagator: Optional[TextMapPropagator] = None,
) -> str:
    """
    Serialize a trace context into a header value.

    Uses the current context when none is given. Returns an empty string when
    the context holds no valid span.
    """
    carrier = ScalarCarrier()
    (propagator or _propagator).inject(carrier, context=context)
    return carrier.value()


def extract_context(
    header_value: Optional[str],
    propagator: Optional[TextMapPropagator] = None,
) -> Context:
    """
    Deserialize a header value into an OpenTelemetry context.

    The result is rooted on an empty context, so it never inherits the
    caller's current span. Malformed values yield a context without a span.
    """
    carrier = ScalarCarrier(header_value)
    return (propagator or _propagator).extract(carrier, context=Context())


def parse_trace_header(
    header_value: Optional[str],
    propagator: Optional[TextMapPropagator] = None,
) -> Optional[SpanContext]:
    """Parse a header value into a remote SpanContext, or None if it is not valid."""
    if not header_value:
        return None
    span_context = get_current_span(extract_context(header_value, propagator)).get_span_context()
    if not span_context.is_valid:
        logger.debug(f"Ignoring unparseable trace header {header_value!r}")
        return None
    return span_context


def trace_header_from_attributes(attributes: Optional[Mapping[str, str]]) -> Optional[str]:
    """Return the trace header stored in a received message's system attributes."""
    if not isinstance(attributes, Mapping):
        return None
    for key in TRACE_HEADER_LOOKUP_KEYS:
        value = attributes.get(key)
        if value:
            return value
    return None
