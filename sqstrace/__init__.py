"""Trace context propagation across Amazon SQS with OpenTelemetry."""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

__version__ = "0.1.0"

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider

from sqstrace.config import SqsTraceConfig, load_config, overrides_from_keywords
from sqstrace.context import ScalarCarrier, format_trace_header, parse_trace_header
from sqstrace.errors import ConfigError, InstrumentationError, PropagationError, SqsTraceError
from sqstrace.instrumentation import (
    DEFAULT_TRACER_NAME,
    Instrumentation,
    instrument_client,
    instrument_session,
    remove_middleware,
    uninstrument_client,
    uninstrument_session,
)
from sqstrace.tracer import build_tracer_provider

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_provider: Optional[TracerProvider] = None
_instrumented_events: Any = None


def init(
    config: Optional[SqsTraceConfig] = None,
    config_file: Optional[str] = None,
    **overrides: Any,
) -> TracerProvider:
    """
    Set up tracing for an SQS producer or consumer process.

    Builds a TracerProvider from configuration, installs it as the global
    provider and, when ``instrumentation.instrument_boto3`` is set, hooks boto3's
    default session so new SQS clients propagate trace context.

    Keyword overrides use flat names (``service_name="orders-worker"``,
    ``enable_console=True``) and take priority over the environment and the
    config file. They are ignored when ``config`` is given.

    Calling init() again returns the provider from the first call.

    Raises:
        SqsTraceError: if another TracerProvider is already installed globally,
            including one left behind by an earlier init()/shutdown() cycle.
            OpenTelemetry only lets the global provider be set once.
    """
    global _provider, _instrumented_events
    with _lock:
        if _provider is not None:
            logger.warning("sqstrace.init() already called; returning the existing provider")
            return _provider

        if config is None:
            config = load_config(config_file=config_file, overrides=overrides_from_keywords(overrides))
        if config.logging.debug:
            logging.getLogger("sqstrace").setLevel(logging.DEBUG)

        provider = build_tracer_provider(config)
        trace.set_tracer_provider(provider)
        if trace.get_tracer_provider() is not provider:
            provider.shutdown()
            logger.warning("sqstrace.init(): a global TracerProvider is already installed and cannot be replaced")
            raise SqsTraceError(
                "Global TracerProvider already set",
                details={"installed": type(trace.get_tracer_provider()).__name__},
            )

        if config.instrumentation.instrument_boto3:
            _instrumented_events = instrument_session()

        _provider = provider
        logger.debug(f"sqstrace initialized, tracer: {config.tracing.tracer_name}")
        return provider


def shutdown() -> None:
    """Flush and shut down the provider installed by init() and remove its boto3 hook."""
    global _provider, _instrumented_events
    with _lock:
        if _instrumented_events is not None:
            remove_middleware(_instrumented_events)
            _instrumented_events = None
        if _provider is not None:
            _provider.shutdown()
            _provider = None


def get_tracer(name: Optional[str] = None) -> trace.Tracer:
    """Return a tracer from the global provider."""
    return trace.get_tracer(name or DEFAULT_TRACER_NAME, __version__)


__all__ = [
    "__version__",
    "init",
    "shutdown",
    "get_tracer",
    "SqsTraceConfig",
    "load_config",
    "ScalarCarrier",
    "format_trace_header",
    "parse_trace_header",
    "SqsTraceError",
    "ConfigError",
    "PropagationError",
    "InstrumentationError",
    "DEFAULT_TRACER_NAME",
    "Instrumentation",
    "instrument_client",
    "instrument_session",
    "uninstrument_client",
    "uninstrument_session",
]
