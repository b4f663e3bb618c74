"""Helper functions for ids and SQS resource names."""

from __future__ import annotations

from typing import Any, Mapping, Optional


def format_trace_id(trace_id: int) -> str:
    """
    Format OTel trace_id (int) to hex string.

    Args:
        trace_id: OTel trace_id as int

    Returns:
        32-character hex string
    """
    return format(trace_id, '032x')


def format_span_id(span_id: int) -> str:
    """
    Format OTel span_id (int) to hex string.

    Args:
        span_id: OTel span_id as int

    Returns:
        16-character hex string
    """
    return format(span_id, '016x')


def queue_name_from_arn(arn: Optional[str]) -> Optional[str]:
    """
    Return the queue name from an SQS queue ARN.

    ``arn:aws:sqs:us-east-1:123456789012:orders`` gives ``orders``. Values that
    are not SQS ARNs give None.
    """
    if not arn:
        return None
    parts = arn.split(":")
    if len(parts) != 6 or parts[0] != "arn" or parts[2] != "sqs":
        return None
    return parts[5] or None


def queue_name_from_url(url: Optional[str]) -> Optional[str]:
    """Return the queue name, the last path segment of an SQS queue URL."""
    if not url:
        return None
    return url.rstrip("/").rsplit("/", 1)[-1] or None


def get_field(record: Mapping[str, Any], *names: str) -> Any:
    """Return the first present, non-empty field among several spellings of a key."""
    for name in names:
        value = record.get(name)
        if value:
            return value
    return None
