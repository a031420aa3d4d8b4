"""
zip_weather.observability.tracing

OpenTelemetry tracing for both services.

Responsibilities:
- Own the tracer provider lifecycle (OTLP/gRPC exporter, batch processor) as a scoped resource.
- Open server spans from incoming W3C trace headers and client spans for outbound calls.
- Inject the current trace context into outbound request headers.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.propagate import extract, inject, set_global_textmap
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON
from opentelemetry.trace import Span, SpanKind
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from zip_weather.observability.logging import get_logger
from zip_weather.settings import ServiceSettings

TRACER_NAME = "zip_weather"

log = get_logger(__name__)

# ProxyTracer until a provider is installed; it then delegates transparently.
_tracer = trace.get_tracer(TRACER_NAME)


@contextmanager
def tracer_provider(
    *,
    settings: ServiceSettings,
    exporter: SpanExporter | None = None,
) -> Iterator[TracerProvider | None]:
    """
    Install a process-wide tracer provider for the duration of the block.

    On exit the provider is shut down, which flushes the batch processor, so it must
    wrap the whole server run (spans of in-flight requests are exported last).
    """

    set_global_textmap(TraceContextTextMapPropagator())

    if not settings.tracing_enabled:
        log.info("tracing_disabled")
        yield None
        return

    provider = TracerProvider(
        resource=Resource.create({SERVICE_NAME: settings.service_name}),
        sampler=ALWAYS_ON,
    )
    if exporter is None:
        exporter = OTLPSpanExporter(endpoint=settings.otlp_endpoint, insecure=True)
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    log.info("tracing_enabled", endpoint=settings.otlp_endpoint)

    try:
        yield provider
    finally:
        provider.shutdown()
        log.info("tracer_provider_shutdown")


@contextmanager
def server_span(name: str, headers: Mapping[str, str]) -> Iterator[Span]:
    # Parent is whatever the caller sent in `traceparent`; a missing header starts a new trace.
    with _tracer.start_as_current_span(
        name, context=extract(headers), kind=SpanKind.SERVER
    ) as span:
        yield span


@contextmanager
def client_span(name: str) -> Iterator[Span]:
    with _tracer.start_as_current_span(name, kind=SpanKind.CLIENT) as span:
        yield span


def outbound_headers() -> dict[str, str]:
    headers: dict[str, str] = {}
    inject(headers)
    return headers


# --- Module Notes -----------------------------------------------------------
# `start_as_current_span` records a raised exception and sets ERROR status before
# ending the span, so handlers only need to raise from inside the `with` block.
