"""OpenTelemetry tracing for the task service.

Built once at startup when TELEMETRY_ENABLED is true and torn down with the
app. Spans come only from the FastAPI and SQLAlchemy instrumentors, which
receive the provider explicitly; the global tracer provider is left alone.
"""

import logging

from fastapi import FastAPI
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

# Probes would drown real traffic in spans.
EXCLUDED_URLS = "/api/health"


def _span_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Exporter for TELEMETRY_EXPORTER; None means spans are recorded but not shipped."""
    if exporter_type == "none":
        return None
    if exporter_type == "otlp":
        if otlp_endpoint:
            return OTLPSpanExporter(
                endpoint=otlp_endpoint,
                insecure=otlp_endpoint.startswith("http://"),
            )
        logger.warning("TELEMETRY_OTLP_ENDPOINT not set, exporting spans to console")
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider plus the instrumentation attached to it."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        environment: str = "development",
    ) -> None:
        self.resource = Resource.create(
            {
                SERVICE_NAME: service_name,
                SERVICE_VERSION: service_version,
                "deployment.environment": environment,
            }
        )
        self.tracer_provider: TracerProvider | None = None
        self._app: FastAPI | None = None
        self._sqlalchemy_instrumented = False

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider:
        """Create the tracer provider with the configured exporter and sampler."""
        provider = TracerProvider(
            resource=self.resource,
            sampler=ParentBased(TraceIdRatioBased(sample_rate)),
        )
        exporter = _span_exporter(exporter_type, otlp_endpoint)
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        self.tracer_provider = provider
        logger.info(
            "Tracing enabled (exporter=%s, sample_rate=%s)", exporter_type, sample_rate
        )
        return provider

    def instrument_fastapi(self, app: FastAPI) -> None:
        """Trace every request except the health probes."""
        if self.tracer_provider is None:
            return
        FastAPIInstrumentor.instrument_app(
            app,
            tracer_provider=self.tracer_provider,
            excluded_urls=EXCLUDED_URLS,
        )
        self._app = app

    def instrument_sqlalchemy(self, engine: AsyncEngine) -> None:
        """Trace statements on the engine's sync core (async engines wrap one)."""
        if self.tracer_provider is None:
            return
        SQLAlchemyInstrumentor().instrument(
            engine=engine.sync_engine,
            tracer_provider=self.tracer_provider,
        )
        self._sqlalchemy_instrumented = True

    def shutdown(self) -> None:
        """Detach instrumentation, then flush and close the provider."""
        if self._app is not None:
            FastAPIInstrumentor.uninstrument_app(self._app)
            self._app = None
        if self._sqlalchemy_instrumented:
            SQLAlchemyInstrumentor().uninstrument()
            self._sqlalchemy_instrumented = False
        if self.tracer_provider is not None:
            self.tracer_provider.shutdown()
            self.tracer_provider = None
            logger.info("Tracing shut down")


_telemetry: TelemetryConfig | None = None


def get_telemetry() -> TelemetryConfig | None:
    """Return the process telemetry instance (set at startup), if any."""
    return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    """Set (or clear, with None) the process telemetry instance."""
    global _telemetry
    _telemetry = telemetry
