"""Observability setup for OpenTelemetry, metrics, and structured logging."""

import logging

from opentelemetry import trace, metrics
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from prometheus_client import Counter, Histogram, generate_latest, CollectorRegistry
import structlog

from .config import settings

SERVICE_NAME = "timola-tours-api"
SERVICE_VERSION = "1.0.0"

# Prometheus metrics
REGISTRY = CollectorRegistry()

# Request metrics
REQUEST_COUNT = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code'],
    registry=REGISTRY
)

REQUEST_DURATION = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=REGISTRY
)

# Business metrics
TOURS_CREATED = Counter(
    'tours_created_total',
    'Total tours created',
    registry=REGISTRY
)

TOURS_DELETED = Counter(
    'tours_deleted_total',
    'Total tours deleted',
    registry=REGISTRY
)

TRIP_REQUESTS_CREATED = Counter(
    'trip_requests_created_total',
    'Total trip requests submitted',
    registry=REGISTRY
)

TRIP_REQUEST_STATUS_CHANGES = Counter(
    'trip_request_status_changes_total',
    'Trip request status changes by target status',
    ['status'],
    registry=REGISTRY
)

CONTACT_MESSAGES_CREATED = Counter(
    'contact_messages_created_total',
    'Total contact messages submitted',
    registry=REGISTRY
)

RATE_LIMITED_REQUESTS = Counter(
    'rate_limited_requests_total',
    'Requests rejected by the rate limiter',
    ['policy'],
    registry=REGISTRY
)


def setup_structured_logging():
    """Configure structured logging with structlog."""

    def add_trace_context(logger, method_name, event_dict):
        """Add trace context to log events."""
        span = trace.get_current_span()
        if span and span.is_recording():
            ctx = span.get_span_context()
            event_dict['trace_id'] = format(ctx.trace_id, '032x')
            event_dict['span_id'] = format(ctx.span_id, '016x')
        return event_dict

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_trace_context,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer() if settings.debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _resource() -> Resource:
    return Resource.create({
        "service.name": SERVICE_NAME,
        "service.version": SERVICE_VERSION,
        "environment": settings.environment,
    })


def setup_tracing():
    """Setup OpenTelemetry tracing."""
    provider = TracerProvider(resource=_resource())

    if settings.otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(endpoint=settings.otlp_endpoint)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(provider)
    return trace.get_tracer(__name__)


def setup_metrics():
    """Setup OpenTelemetry metrics."""
    if settings.otlp_endpoint:
        otlp_exporter = OTLPMetricExporter(endpoint=settings.otlp_endpoint)
        reader = PeriodicExportingMetricReader(exporter=otlp_exporter, export_interval_millis=60000)
        metrics.set_meter_provider(MeterProvider(resource=_resource(), metric_readers=[reader]))

    return metrics.get_meter(__name__)


def instrument_fastapi(app):
    """Instrument FastAPI with OpenTelemetry."""
    FastAPIInstrumentor.instrument_app(app)


def instrument_sqlalchemy(engine):
    """Instrument the async engine's SQLAlchemy core engine with OpenTelemetry."""
    SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)


class MetricsCollector:
    """Collector for request and business metrics."""

    @staticmethod
    def record_request(method: str, endpoint: str, status_code: int, duration_seconds: float):
        """Record a completed HTTP request."""
        REQUEST_COUNT.labels(method=method, endpoint=endpoint, status_code=str(status_code)).inc()
        REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration_seconds)

    @staticmethod
    def record_tour_created():
        TOURS_CREATED.inc()

    @staticmethod
    def record_tour_deleted():
        TOURS_DELETED.inc()

    @staticmethod
    def record_trip_request_created():
        TRIP_REQUESTS_CREATED.inc()

    @staticmethod
    def record_trip_request_status(status: str):
        """Record a trip request moving to ``status``."""
        TRIP_REQUEST_STATUS_CHANGES.labels(status=status).inc()

    @staticmethod
    def record_contact_message_created():
        CONTACT_MESSAGES_CREATED.inc()

    @staticmethod
    def record_rate_limited(policy: str):
        """Record a request rejected under ``policy``."""
        RATE_LIMITED_REQUESTS.labels(policy=policy).inc()


def get_prometheus_metrics():
    """Get Prometheus metrics for the /metrics endpoint."""
    return generate_latest(REGISTRY)


# Global metrics collector instance
metrics_collector = MetricsCollector()
