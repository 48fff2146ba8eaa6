from typing import Dict, Optional
import functools
import asyncio
import logging
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from pydantic_settings import BaseSettings, SettingsConfigDict

# Configure logging at module level
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    force=True,  # This ensures it overrides any existing configuration
)


class TelemetrySettings(BaseSettings):
    """Telemetry is configured separately so logging works before app config is valid."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    otel_service_name: str = "docsub-service"
    otel_exporter_endpoint: Optional[str] = None
    otel_exporter_token: Optional[str] = None
    otel_exporter_dataset: Optional[str] = None
    log_level: str = "INFO"


# Global flag to ensure initialization only happens once
_initialized = False
tracer = None


def _initialize_telemetry():
    """Initialize telemetry once and only once."""
    global _initialized, tracer

    if _initialized:
        return

    telemetry_settings = TelemetrySettings()
    resource = Resource(attributes={SERVICE_NAME: telemetry_settings.otel_service_name})

    # TRACING SETUP
    provider = TracerProvider(resource=resource)
    if telemetry_settings.otel_exporter_endpoint:
        headers = {}
        if telemetry_settings.otel_exporter_token:
            headers["Authorization"] = f"Bearer {telemetry_settings.otel_exporter_token}"
        if telemetry_settings.otel_exporter_dataset:
            headers["X-Axiom-Dataset"] = telemetry_settings.otel_exporter_dataset
        otlp_trace_exporter = OTLPSpanExporter(
            endpoint=telemetry_settings.otel_exporter_endpoint,
            headers=headers,
        )
        provider.add_span_processor(BatchSpanProcessor(otlp_trace_exporter))
    trace.set_tracer_provider(provider)
    tracer = trace.get_tracer(telemetry_settings.otel_service_name)

    logging.getLogger().setLevel(telemetry_settings.log_level.upper())

    _initialized = True
    logging.getLogger(__name__).info(
        f"Telemetry initialized (exporter: {telemetry_settings.otel_exporter_endpoint or 'none'})"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance. Ensures telemetry is initialized.
    Use this instead of logging.getLogger() directly.
    """
    if not _initialized:
        _initialize_telemetry()
    return logging.getLogger(name)


def _get_tracer():
    if not _initialized:
        _initialize_telemetry()
    return tracer


# Custom decorator for automatic span naming
def trace_span(func):
    """Decorator that automatically creates a span with the function name."""

    def _span_name(args) -> str:
        if args and hasattr(args[0], func.__name__):
            # If it's a method, include class name
            return f"{args[0].__class__.__name__}.{func.__name__}"
        return func.__name__

    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs):
        with _get_tracer().start_as_current_span(_span_name(args)):
            return func(*args, **kwargs)

    @functools.wraps(func)
    async def async_wrapper(*args, **kwargs):
        with _get_tracer().start_as_current_span(_span_name(args)):
            return await func(*args, **kwargs)

    # Return appropriate wrapper based on function type
    if asyncio.iscoroutinefunction(func):
        return async_wrapper
    else:
        return sync_wrapper


def log_span_event(message: str, attributes: Optional[Dict[str, str]] = None):
    """
    Log a message as an event in the current span.
    This will make the log appear in the trace view as well.
    """
    current_span = trace.get_current_span()
    if current_span and current_span.is_recording():
        current_span.add_event(message, attributes=attributes or {})

    # Also log normally so it appears in logs
    logger = get_logger(__name__)
    logger.info(message, extra={"span_attributes": attributes or {}})
