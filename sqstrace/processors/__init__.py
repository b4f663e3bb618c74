"""Span processors."""

from sqstrace.processors.logging_processor import LoggingSpanProcessor

__all__ = [
    "LoggingSpanProcessor",
]
