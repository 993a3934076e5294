"""OpenTelemetry tracing setup for the operator manager and hook job.

Exporters: console (development), otlp (gRPC collector), or none.
Telemetry is off unless settings.telemetry_enabled is set.
"""

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

from secrets_operator.core.config import Settings

logger = logging.getLogger(__name__)

# Kubelet probes hit these every few seconds.
_UNTRACED_URLS = "/api/v1/health"


def _build_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    if exporter_type == "none":
        return None
    if exporter_type == "otlp":
        if otlp_endpoint:
            return OTLPSpanExporter(
                endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
            )
        logger.warning("OTLP exporter selected without an endpoint, using console")
    elif exporter_type != "console":
        logger.warning("Unknown exporter type '%s', using console", exporter_type)
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Owns the tracer provider for one operator process."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.tracer_provider: TracerProvider | None = None

    def setup_telemetry(self) -> TracerProvider | None:
        """Install a global tracer provider built from settings.

        Returns:
            The provider, or None when telemetry is disabled.
        """
        settings = self.settings
        if not settings.telemetry_enabled:
            logger.info("Telemetry disabled")
            return None
        resource = Resource(
            attributes={
                SERVICE_NAME: settings.app_name,
                SERVICE_VERSION: settings.app_version,
                "deployment.environment": settings.telemetry_environment,
                "k8s.namespace.name": settings.kube_namespace or "all",
            }
        )
        provider = TracerProvider(
            resource=resource,
            sampler=ParentBased(TraceIdRatioBased(settings.telemetry_sample_rate)),
        )
        exporter = _build_exporter(settings.telemetry_exporter, settings.telemetry_otlp_endpoint)
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        self.tracer_provider = provider
        logger.info(
            "OpenTelemetry initialized: service=%s, exporter=%s",
            settings.app_name,
            settings.telemetry_exporter,
        )
        return provider

    def instrument_fastapi(self, app: FastAPI) -> None:
        """Trace probe and cache endpoints, skipping liveness checks."""
        if self.tracer_provider is None:
            return
        FastAPIInstrumentor.instrument_app(
            app, tracer_provider=self.tracer_provider, excluded_urls=_UNTRACED_URLS
        )

    def instrument_logging(self) -> None:
        """Inject trace_id/span_id into log records."""
        if self.tracer_provider is None:
            return
        LoggingInstrumentor().instrument(
            tracer_provider=self.tracer_provider, set_logging_format=True
        )

    def shutdown(self) -> None:
        """Flush pending spans and stop the provider."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception:
            logger.exception("Error during telemetry shutdown")
        self.tracer_provider = None


_telemetry: TelemetryConfig | None = None


def get_telemetry() -> TelemetryConfig | None:
    """Return the process telemetry instance (set at startup)."""
    return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    """Set (or clear, with None) the process telemetry instance."""
    global _telemetry
    _telemetry = telemetry
