"""Configuration loading: TOML file, environment variables and explicit overrides.

Priority, highest first: explicit overrides > environment variables > config
file > defaults.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from sqstrace.errors import ConfigError
from sqstrace.instrumentation.consumer import DEFAULT_TRACER_NAME

CONFIG_FILE_NAME = "sqstrace.toml"
ENV_PREFIX = "SQSTRACE_"


class TracingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tracer_name: str = DEFAULT_TRACER_NAME
    service_name: Optional[str] = None


class ExportersConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enable_console: bool = False
    use_otlp: bool = False
    endpoint: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    timeout: float = Field(default=10.0, gt=0)


class InstrumentationConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    instrument_boto3: bool = False


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    debug: bool = False
    log_spans: bool = False


class SqsTraceConfig(BaseModel):
    """Top-level configuration, one section per TOML table."""

    model_config = ConfigDict(extra="forbid")

    tracing: TracingConfig = Field(default_factory=TracingConfig)
    exporters: ExportersConfig = Field(default_factory=ExportersConfig)
    instrumentation: InstrumentationConfig = Field(default_factory=InstrumentationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def check_exporters(self) -> "SqsTraceConfig":
        if self.exporters.use_otlp and not self.exporters.endpoint:
            raise ValueError("exporters.use_otlp requires exporters.endpoint")
        return self


# env var suffix -> (section, key)
_ENV_VARS = {
    "TRACER_NAME": ("tracing", "tracer_name"),
    "SERVICE_NAME": ("tracing", "service_name"),
    "ENABLE_CONSOLE": ("exporters", "enable_console"),
    "USE_OTLP": ("exporters", "use_otlp"),
    "ENDPOINT": ("exporters", "endpoint"),
    "INSTRUMENT_BOTO3": ("instrumentation", "instrument_boto3"),
    "DEBUG": ("logging", "debug"),
    "LOG_SPANS": ("logging", "log_spans"),
}

# init() keyword -> (section, key)
_KEYWORDS = {suffix.lower(): target for suffix, target in _ENV_VARS.items()}
_KEYWORDS.update({
    "headers": ("exporters", "headers"),
    "timeout": ("exporters", "timeout"),
})


def find_config_file() -> Optional[str]:
    """
    Look for a config file in the current directory, then in the user's config dir.

    Returns:
        Path of the first file found, or None
    """
    candidates = [
        Path.cwd() / CONFIG_FILE_NAME,
        Path.home() / ".config" / "sqstrace" / CONFIG_FILE_NAME,
    ]
    for path in candidates:
        if path.is_file():
            return str(path)
    return None


def load_toml_config(path: str) -> Dict[str, Any]:
    """
    Read a TOML config file into a dict.

    A missing file yields an empty dict; unparseable TOML raises ConfigError.
    """
    file_path = Path(path)
    if not file_path.is_file():
        return {}
    try:
        with file_path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError("Invalid TOML config file", details={"path": path, "error": str(exc)}) from exc


def load_env_config() -> Dict[str, Any]:
    """Collect SQSTRACE_* environment variables into a nested config dict."""
    result: Dict[str, Dict[str, Any]] = {}
    for suffix, (section, key) in _ENV_VARS.items():
        value = os.environ.get(ENV_PREFIX + suffix)
        if value is None:
            continue
        result.setdefault(section, {})[key] = value
    return result


def overrides_from_keywords(keywords: Dict[str, Any]) -> Dict[str, Any]:
    """
    Turn flat ``init()`` keywords into a nested overrides dict.

    ``service_name="orders"`` becomes ``{"tracing": {"service_name": "orders"}}``.
    A section name with a dict value is taken as-is. None values are skipped.
    """
    result: Dict[str, Dict[str, Any]] = {}
    for name, value in keywords.items():
        if value is None:
            continue
        if name in SqsTraceConfig.model_fields and isinstance(value, dict):
            result[name] = _merge(result.get(name, {}), value)
            continue
        if name not in _KEYWORDS:
            raise ConfigError("Unknown configuration keyword", details={"keyword": name})
        section, key = _KEYWORDS[name]
        result.setdefault(section, {})[key] = value
    return result


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def validate_config(data: Dict[str, Any]) -> SqsTraceConfig:
    """Validate a raw config dict, raising ConfigError on any problem."""
    try:
        return SqsTraceConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError("Invalid configuration", details={"errors": exc.error_count()}) from exc


def load_config(
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> SqsTraceConfig:
    """
    Build the effective configuration.

    Args:
        config_file: Explicit TOML path; when omitted, find_config_file() is used
        overrides: Nested dict of explicit settings, applied last
    """
    path = config_file or find_config_file()
    data = load_toml_config(path) if path else {}
    data = _merge(data, load_env_config())
    data = _merge(data, overrides or {})
    return validate_config(data)
