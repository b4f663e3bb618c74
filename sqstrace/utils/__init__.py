"""Utility helpers."""

from sqstrace.utils.helpers import (
    format_span_id,
    format_trace_id,
    get_field,
    queue_name_from_arn,
    queue_name_from_url,
)

__all__ = [
    "format_span_id",
    "format_trace_id",
    "get_field",
    "queue_name_from_arn",
    "queue_name_from_url",
]
