"""Telemetry configuration helpers."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Dict

from pydantic import BaseModel, Field

from .logger import init_logging
from .metrics import init_metrics
from .tracer import init_tracing

_TRUTHY = {"1", "true", "yes", "on"}

_FLAG_ENV = {
    "enable_tracing": ("SEABATTLE_ENABLE_TRACING", "OTEL_TRACES_ENABLED"),
    "enable_metrics": ("SEABATTLE_ENABLE_METRICS", "OTEL_METRICS_ENABLED"),
    "enable_logging": ("SEABATTLE_ENABLE_LOGGING", "OTEL_LOGS_ENABLED"),
}

_ENDPOINT_ENV = {
    "otlp_traces_endpoint": ("OTEL_EXPORTER_OTLP_TRACES_ENDPOINT", "v1/traces"),
    "otlp_metrics_endpoint": ("OTEL_EXPORTER_OTLP_METRICS_ENDPOINT", "v1/metrics"),
    "otlp_logs_endpoint": ("OTEL_EXPORTER_OTLP_LOGS_ENDPOINT", "v1/logs"),
}

_ENDPOINT_FLAGS = {
    "otlp_traces_endpoint": "enable_tracing",
    "otlp_metrics_endpoint": "enable_metrics",
    "otlp_logs_endpoint": "enable_logging",
}


class TelemetryConfig(BaseModel):
    """Runtime configuration for telemetry exporters."""

    enable_tracing: bool = False
    enable_metrics: bool = False
    enable_logging: bool = False
    otlp_traces_endpoint: str | None = None
    otlp_metrics_endpoint: str | None = None
    otlp_logs_endpoint: str | None = None
    service_name: str = "seabattle"
    service_namespace: str = "game"
    resource_attributes: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_env(cls, **overrides: Any) -> "TelemetryConfig":
        """Construct config from env vars (`SEABATTLE_*` + `OTEL_*`)."""

        data: Dict[str, Any] = cls().model_dump()

        for name, env_names in _FLAG_ENV.items():
            for env_name in env_names:
                value = os.getenv(env_name)
                if value is not None:
                    data[name] = value.strip().lower() in _TRUTHY
                    break

        base_endpoint = (os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or "").rstrip("/")
        for name, (env_name, suffix) in _ENDPOINT_ENV.items():
            explicit = os.getenv(env_name)
            if explicit:
                data[name] = explicit
            elif base_endpoint:
                data[name] = f"{base_endpoint}/{suffix}"

        data["service_name"] = os.getenv("OTEL_SERVICE_NAME") or data["service_name"]
        data["service_namespace"] = os.getenv("OTEL_SERVICE_NAMESPACE") or data["service_namespace"]
        data["resource_attributes"] = _parse_resource_attributes(os.getenv("OTEL_RESOURCE_ATTRIBUTES"))

        data.update(overrides)

        # A configured endpoint switches its exporter on.
        for endpoint, flag in _ENDPOINT_FLAGS.items():
            if data.get(endpoint):
                data[flag] = True

        return cls(**data)


def _parse_resource_attributes(raw: str | None) -> dict[str, str]:
    attrs: dict[str, str] = {}
    if not raw:
        return attrs
    for part in raw.split(","):
        if "=" not in part:
            continue
        key, value = part.split("=", 1)
        attrs[key.strip()] = value.strip()
    return attrs


@lru_cache(maxsize=1)
def load_telemetry_config() -> TelemetryConfig:
    """Load and cache telemetry config from the environment."""

    return TelemetryConfig.from_env()


def init_telemetry(config: TelemetryConfig | None = None) -> TelemetryConfig:
    """Start whichever telemetry subsystems the config enables."""

    resolved = config or load_telemetry_config()

    if resolved.enable_tracing:
        init_tracing(resolved)
    if resolved.enable_metrics:
        init_metrics(resolved)
    if resolved.enable_logging:
        init_logging(resolved)
    return resolved
