"""SQS producer hooks and consumer span helpers."""

from sqstrace.instrumentation.consumer import DEFAULT_TRACER_NAME, Instrumentation, message_origin
from sqstrace.instrumentation.producer import (
    SUPPORTED_OPERATIONS,
    configure_middleware,
    inject_trace_header,
    instrument_client,
    instrument_session,
    remove_middleware,
    uninstrument_client,
    uninstrument_session,
)

__all__ = [
    "DEFAULT_TRACER_NAME",
    "Instrumentation",
    "message_origin",
    "SUPPORTED_OPERATIONS",
    "configure_middleware",
    "inject_trace_header",
    "instrument_client",
    "instrument_session",
    "remove_middleware",
    "uninstrument_client",
    "uninstrument_session",
]
