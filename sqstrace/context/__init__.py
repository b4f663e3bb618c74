"""Context utilities for SQS trace propagation."""

from sqstrace.context.carrier import ScalarCarrier
from sqstrace.context.propagators import (
    TRACE_HEADER_ATTRIBUTE,
    TRACE_HEADER_LOOKUP_KEYS,
    extract_context,
    format_trace_header,
    get_default_propagator,
    parse_trace_header,
    trace_header_from_attributes,
)

__all__ = [
    "ScalarCarrier",
    "TRACE_HEADER_ATTRIBUTE",
    "TRACE_HEADER_LOOKUP_KEYS",
    "extract_context",
    "format_trace_header",
    "get_default_propagator",
    "parse_trace_header",
    "trace_header_from_attributes",
]
