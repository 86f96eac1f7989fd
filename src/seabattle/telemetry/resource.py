"""OpenTelemetry resource shared by every exporter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry.sdk.resources import Resource

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .config import TelemetryConfig


def build_resource(config: TelemetryConfig) -> Resource:
    """Describe this process; explicit resource attributes win over the defaults."""
    attributes = {
        "service.name": config.service_name,
        "service.namespace": config.service_namespace,
    }
    attributes.update(config.resource_attributes)
    return Resource.create(attributes)
