"""
Consumer-side spans for SQS events delivered to AWS Lambda.

The per-message span is linked to the producer's span rather than parented by
it: the message sat in the queue for an unknown time and may be delivered more
than once, so the consumer span is rooted in the consumer's own context.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.trace import Link, Span, SpanKind, Tracer

from sqstrace.context import (
    get_default_propagator,
    parse_trace_header,
    trace_header_from_attributes,
)
from sqstrace.instrumentation.attributes import (
    BATCH_SPAN_NAME,
    COMMON_ATTRIBUTES,
    MESSAGE_SPAN_SUFFIX,
    MESSAGING_BATCH_MESSAGE_COUNT,
    MESSAGING_DESTINATION_NAME,
    MESSAGING_MESSAGE_ID,
)
from sqstrace.utils.helpers import get_field, queue_name_from_arn

logger = logging.getLogger(__name__)

DEFAULT_TRACER_NAME = "sqstrace.consumer.Instrumentation"

Record = Mapping[str, Any]
Event = Union[Mapping[str, Any], Sequence[Record]]


def _records(event: Event) -> List[Record]:
    if isinstance(event, Mapping):
        return list(event.get("Records") or [])
    return list(event)


def message_origin(record: Record) -> Optional[str]:
    """Name of the queue a record came from: the ARN's queue name, else its event source."""
    arn = get_field(record, "eventSourceARN", "EventSourceARN")
    return queue_name_from_arn(arn) or get_field(record, "eventSource", "EventSource")


class Instrumentation:
    """
    OpenTelemetry instrumentation for SQS consumers.

    Args:
        tracer: Tracer used to start spans. Defaults to the global provider's
            tracer named ``DEFAULT_TRACER_NAME``.
        propagator: Propagator used to decode trace headers. Defaults to AWS X-Ray.
    """

    def __init__(
        self,
        tracer: Optional[Tracer] = None,
        propagator: Optional[TextMapPropagator] = None,
    ) -> None:
        if tracer is None:
            from sqstrace import __version__

            tracer = trace.get_tracer(DEFAULT_TRACER_NAME, __version__)
        self.tracer = tracer
        self.propagator = propagator or get_default_propagator()

    @classmethod
    def from_config(cls, config: Any, propagator: Optional[TextMapPropagator] = None) -> "Instrumentation":
        from sqstrace import __version__

        return cls(
            tracer=trace.get_tracer(config.tracing.tracer_name, __version__),
            propagator=propagator,
        )

    def _event_span_args(self, event: Event) -> Tuple[str, Dict[str, Any]]:
        attributes: Dict[str, Any] = dict(COMMON_ATTRIBUTES)
        attributes[MESSAGING_BATCH_MESSAGE_COUNT] = len(_records(event))
        return BATCH_SPAN_NAME, attributes

    def _message_span_args(
        self, record: Record, destination: Optional[str]
    ) -> Tuple[str, Dict[str, Any], List[Link]]:
        origin = destination or message_origin(record)
        attributes: Dict[str, Any] = dict(COMMON_ATTRIBUTES)
        message_id = get_field(record, "messageId", "MessageId")
        if message_id:
            attributes[MESSAGING_MESSAGE_ID] = message_id
        if origin:
            attributes[MESSAGING_DESTINATION_NAME] = origin
        name = f"{origin} {MESSAGE_SPAN_SUFFIX}" if origin else MESSAGE_SPAN_SUFFIX
        return name, attributes, self._links_for(record)

    def _links_for(self, record: Record) -> List[Link]:
        header = None
        try:
            header = trace_header_from_attributes(get_field(record, "attributes", "Attributes"))
            if not header:
                logger.debug("SQS message carries no trace header")
                return []
            remote = parse_trace_header(header, self.propagator)
        except Exception as exc:
            # Tracing is best-effort and must not stop message processing
            logger.debug(f"Failed to extract trace header {header!r}: {exc!r}")
            return []
        if remote is None:
            return []
        return [Link(remote)]

    def start_event_span(self, event: Event, context: Optional[Context] = None) -> Span:
        """
        Start a span for an SQS event containing multiple messages.

        It represents the whole batch handling operation and is not linked to
        any producer. The caller must end the span.
        """
        name, attributes = self._event_span_args(event)
        return self.tracer.start_span(
            name,
            context=context,
            kind=SpanKind.CONSUMER,
            attributes=attributes,
        )

    def start_message_span(
        self,
        record: Record,
        context: Optional[Context] = None,
        destination: Optional[str] = None,
    ) -> Span:
        """
        Start a span for an individual SQS message.

        The producer context is extracted from the message's trace header and
        attached as a link. Messages without a usable header get a span with
        no links. The caller must end the span.
        """
        name, attributes, links = self._message_span_args(record, destination)
        return self.tracer.start_span(
            name,
            context=context,
            kind=SpanKind.CONSUMER,
            attributes=attributes,
            links=links,
        )

    @contextmanager
    def event_span(self, event: Event, context: Optional[Context] = None) -> Iterator[Span]:
        """Start the event span as current, ending it on exit and recording errors."""
        name, attributes = self._event_span_args(event)
        with self.tracer.start_as_current_span(
            name,
            context=context,
            kind=SpanKind.CONSUMER,
            attributes=attributes,
        ) as span:
            yield span

    @contextmanager
    def message_span(
        self,
        record: Record,
        context: Optional[Context] = None,
        destination: Optional[str] = None,
    ) -> Iterator[Span]:
        """Start a message span as current, ending it on exit and recording errors."""
        name, attributes, links = self._message_span_args(record, destination)
        with self.tracer.start_as_current_span(
            name,
            context=context,
            kind=SpanKind.CONSUMER,
            attributes=attributes,
            links=links,
        ) as span:
            yield span

