"""Span helpers for the engine, built on OpenTelemetry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)
from opentelemetry.trace import Tracer

from .resource import build_resource

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .config import TelemetryConfig

TRACER_NAME = "seabattle"

_TRACER: Tracer | None = None
_TRACER_PROVIDER: TracerProvider | None = None


def get_tracer(name: str = TRACER_NAME) -> Tracer:
    """Return the shared tracer; spans are no-ops until :func:`init_tracing` runs."""
    global _TRACER
    if _TRACER is None:
        _TRACER = trace.get_tracer(name)
    return _TRACER


def _span_processor(config: TelemetryConfig) -> SpanProcessor:
    if config.otlp_traces_endpoint:
        return BatchSpanProcessor(OTLPSpanExporter(endpoint=config.otlp_traces_endpoint, insecure=True))
    # Without a collector, print each game span as it closes.
    return SimpleSpanProcessor(ConsoleSpanExporter())


def init_tracing(config: TelemetryConfig) -> Tracer:
    global _TRACER, _TRACER_PROVIDER

    provider = TracerProvider(resource=build_resource(config))
    provider.add_span_processor(_span_processor(config))
    trace.set_tracer_provider(provider)

    _TRACER_PROVIDER = provider
    _TRACER = provider.get_tracer(TRACER_NAME)
    return _TRACER
