"""
Producer-side propagation for boto3/botocore SQS clients.

A handler is registered on the client's botocore event emitter for every
supported send operation. It runs once per API call, after the request
parameters are built and before they are validated, serialized and sent, and
writes the active trace context into the ``AWSTraceHeader`` message system
attribute of each outgoing message.

Usage:

    sqs = boto3.client("sqs")
    instrument_client(sqs)
    sqs.send_message(QueueUrl=url, MessageBody="{}")
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from opentelemetry.context import Context
from opentelemetry.propagators.textmap import TextMapPropagator

from sqstrace.context import TRACE_HEADER_ATTRIBUTE, format_trace_header
from sqstrace.errors import InstrumentationError, PropagationError

logger = logging.getLogger(__name__)

INSTRUMENTATION_ID = "sqstrace.producer"
EVENT_NAME_TEMPLATE = "before-parameter-build.sqs.{operation}"

Params = Dict[str, Any]


def _single_message(params: Params) -> List[Params]:
    return [params]


def _message_batch(params: Params) -> List[Params]:
    return list(params.get("Entries") or [])


# Each send operation maps to the request dicts that carry their own
# MessageSystemAttributes.
_REQUEST_SHAPES: Dict[str, Callable[[Params], List[Params]]] = {
    "SendMessage": _single_message,
    "SendMessageBatch": _message_batch,
}

SUPPORTED_OPERATIONS = tuple(_REQUEST_SHAPES)


def inject_trace_header(
    params: Params,
    operation: str,
    propagator: Optional[TextMapPropagator] = None,
    context: Optional[Context] = None,
) -> Optional[str]:
    """
    Write the serialized trace context into the request's system attributes.

    Every message of one call gets the same header value. Nothing else in the
    request is modified. Returns the header, or None when there was no valid
    span to propagate.

    Raises:
        InstrumentationError: ``operation`` is not a supported send operation
        PropagationError: the propagator failed to serialize the context
    """
    select_messages = _REQUEST_SHAPES.get(operation)
    if select_messages is None:
        raise InstrumentationError(
            "Unsupported SQS operation for trace propagation",
            details={"operation": operation},
        )

    try:
        header = format_trace_header(context, propagator)
    except Exception as exc:
        raise PropagationError(
            "Failed to serialize trace context",
            details={"operation": operation, "error": repr(exc)},
        ) from exc

    if not header:
        logger.debug(f"No active span to propagate on SQS {operation}")
        return None

    for message in select_messages(params):
        system_attributes = message.get("MessageSystemAttributes")
        if system_attributes is None:
            system_attributes = message["MessageSystemAttributes"] = {}
        system_attributes[TRACE_HEADER_ATTRIBUTE] = {
            "DataType": "String",
            "StringValue": header,
        }
    return header


def _make_handler(operation: str, propagator: Optional[TextMapPropagator]):
    def inject_handler(params: Params, **kwargs: Any) -> None:
        inject_trace_header(params, operation, propagator=propagator)

    inject_handler.__name__ = f"inject_trace_header_{operation}"
    return inject_handler


def _unique_id(operation: str) -> str:
    return f"{INSTRUMENTATION_ID}.{operation}"


def _event_names() -> Iterable[tuple]:
    for operation in SUPPORTED_OPERATIONS:
        yield operation, EVENT_NAME_TEMPLATE.format(operation=operation)


def configure_middleware(events: Any, propagator: Optional[TextMapPropagator] = None) -> None:
    """
    Register the trace-header handlers on a botocore event emitter.

    Registration is keyed by a unique id, so configuring the same emitter
    twice keeps a single handler per operation.
    """
    if not hasattr(events, "register"):
        raise InstrumentationError(
            "Object is not a botocore event emitter",
            details={"type": type(events).__name__},
        )
    for operation, event_name in _event_names():
        events.register(
            event_name,
            _make_handler(operation, propagator),
            unique_id=_unique_id(operation),
        )
        logger.debug(f"Registered trace header injection on {event_name}")


def remove_middleware(events: Any) -> None:
    """Unregister the trace-header handlers from a botocore event emitter."""
    for operation, event_name in _event_names():
        events.unregister(event_name, unique_id=_unique_id(operation))


def _session_events(session: Any = None) -> Any:
    if session is None:
        import boto3

        if boto3.DEFAULT_SESSION is None:
            boto3.setup_default_session()
        session = boto3.DEFAULT_SESSION
    # boto3.Session exposes the emitter directly, botocore.session.Session as a component
    events = getattr(session, "events", None)
    if events is None and hasattr(session, "get_component"):
        events = session.get_component("event_emitter")
    if events is None:
        raise InstrumentationError(
            "Session has no event emitter",
            details={"type": type(session).__name__},
        )
    return events


def _client_events(client: Any) -> Any:
    meta = getattr(client, "meta", None)
    events = getattr(meta, "events", None)
    if events is None:
        raise InstrumentationError(
            "Object is not a botocore client",
            details={"type": type(client).__name__},
        )
    return events


def instrument_client(client: Any, propagator: Optional[TextMapPropagator] = None) -> Any:
    """Instrument an existing SQS client; returns the client for chaining."""
    configure_middleware(_client_events(client), propagator)
    return client


def uninstrument_client(client: Any) -> None:
    remove_middleware(_client_events(client))


def instrument_session(session: Any = None, propagator: Optional[TextMapPropagator] = None) -> Any:
    """
    Instrument a boto3 or botocore session.

    Only clients created from the session after this call are affected.
    Defaults to boto3's default session. Returns the session's event emitter.
    """
    events = _session_events(session)
    configure_middleware(events, propagator)
    return events


def uninstrument_session(session: Any = None) -> None:
    remove_middleware(_session_events(session))
