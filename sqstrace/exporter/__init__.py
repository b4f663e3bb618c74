"""Exporters for delivering spans to backends."""

from sqstrace.exporter.otlp_exporter import build_otlp_exporter

__all__ = ["build_otlp_exporter"]
