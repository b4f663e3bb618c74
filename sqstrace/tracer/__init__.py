"""Tracer provider setup."""

from sqstrace.tracer.provider import build_resource, build_tracer_provider

__all__ = [
    "build_resource",
    "build_tracer_provider",
]
