"""OTLP exporter using OpenTelemetry OTLP HTTP exporter."""

from __future__ import annotations

from typing import Dict, Optional

from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter


def build_otlp_exporter(
    endpoint: str,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 10.0,
) -> OTLPSpanExporter:
    """
    Create an OTLP/HTTP span exporter.

    Args:
        endpoint: OTLP traces endpoint URL
        headers: Optional additional headers
        timeout: Request timeout in seconds
    """
    return OTLPSpanExporter(
        endpoint=endpoint,
        headers=dict(headers) if headers else None,
        timeout=timeout,
    )
