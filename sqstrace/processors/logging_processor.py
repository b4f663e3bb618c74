"""Span processor that logs spans when they end."""

from __future__ import annotations

import logging
from typing import Optional

from opentelemetry.sdk.trace import ReadableSpan, SpanProcessor

from sqstrace.utils.helpers import format_span_id, format_trace_id


class LoggingSpanProcessor(SpanProcessor):
    """Logs span summary on end using the standard logging module."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger("sqstrace.spans")

    def on_end(self, span: ReadableSpan) -> None:
        context = span.get_span_context()
        attrs = dict(span.attributes or {})
        duration_ns = None
        if span.end_time is not None and span.start_time is not None:
            duration_ns = span.end_time - span.start_time
        msg = (
            f"[span] name={span.name} trace_id={format_trace_id(context.trace_id)} "
            f"span_id={format_span_id(context.span_id)} kind={span.kind.name} "
            f"links={len(span.links)} duration_ns={duration_ns} attrs={attrs}"
        )
        self.logger.info(msg)

    def shutdown(self) -> None:
        return None

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return True
