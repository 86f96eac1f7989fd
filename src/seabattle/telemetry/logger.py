"""Logging helpers with optional OpenTelemetry export."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .resource import build_resource

if TYPE_CHECKING:
    from .config import TelemetryConfig

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s "
    "| trace_id=%(otelTraceID)s span_id=%(otelSpanID)s"
)

PACKAGE_LOGGER = "seabattle"

_LOGGER: logging.Logger | None = None
_OTLP_HANDLER: logging.Handler | None = None


class _OtelContextFilter(logging.Filter):
    """Fills trace/span placeholders when no span context was injected."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        if not hasattr(record, "otelTraceID"):
            record.otelTraceID = "-"
        if not hasattr(record, "otelSpanID"):
            record.otelSpanID = "-"
        return True


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    global _LOGGER
    if _LOGGER is None:
        _LOGGER = logging.getLogger(name)
    return _LOGGER


def configure_console_logging(level: int | str = logging.WARNING) -> None:
    """Route records to stderr in the trace-aware format used across the game."""
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root_logger.setLevel(level)
    for handler in root_logger.handlers:
        if not any(isinstance(f, _OtelContextFilter) for f in handler.filters):
            handler.addFilter(_OtelContextFilter())


def init_logging(config: TelemetryConfig) -> logging.Logger:
    """Attach an OTLP log handler to the root logger when the exporter is installed."""
    global _OTLP_HANDLER
    logger = get_logger(config.service_name)
    try:
        from opentelemetry._logs import set_logger_provider
        from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
        from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
        from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
    except ImportError:  # pragma: no cover
        return logger

    if _OTLP_HANDLER is not None or not config.otlp_logs_endpoint:
        return logger

    provider = LoggerProvider(resource=build_resource(config))
    exporter = OTLPLogExporter(endpoint=config.otlp_logs_endpoint, insecure=True)
    provider.add_log_record_processor(BatchLogRecordProcessor(exporter))
    set_logger_provider(provider)

    handler = LoggingHandler(logger_provider=provider)
    handler.addFilter(_OtelContextFilter())
    logging.getLogger().addHandler(handler)
    _OTLP_HANDLER = handler
    return logger
