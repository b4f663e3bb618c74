"""sqstrace error hierarchy and exceptions."""

from __future__ import annotations


class SqsTraceError(Exception):
    """Base exception for all sqstrace errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigError(SqsTraceError):
    """Raised when configuration is invalid or conflicting."""
    pass


class PropagationError(SqsTraceError):
    """Raised when the trace context cannot be serialized for an outgoing message."""
    pass


class InstrumentationError(SqsTraceError):
    """Raised when the SQS client hook cannot be registered or dispatched."""
    pass
