"""
tests.test_tracing

Trace-context propagation across the gateway -> resolver hop and span error recording.
"""

from __future__ import annotations

import httpx
import pytest
from conftest import VIACEP_HOST, running
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import SpanKind, StatusCode

from zip_weather.api.app import create_gateway_app, create_resolver_app
from zip_weather.observability.tracing import outbound_headers, server_span, tracer_provider

TRACEPARENT = "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01"


def _by_name(exporter: InMemorySpanExporter) -> dict:
    return {s.name: s for s in exporter.get_finished_spans()}


@pytest.mark.asyncio
async def test_gateway_and_resolver_share_one_trace(
    spans, gateway_settings, resolver_settings, upstreams
) -> None:
    resolver_app = create_resolver_app(settings=resolver_settings, transport=upstreams.transport())

    async with running(resolver_app):
        gateway_app = create_gateway_app(
            settings=gateway_settings,
            transport=httpx.ASGITransport(app=resolver_app),
        )
        async with running(gateway_app) as client:
            r = await client.post(
                "/city-by-zipcode",
                json={"cep": "01001000"},
                headers={"traceparent": TRACEPARENT},
            )

    assert r.status_code == 200
    finished = _by_name(spans)
    gateway = finished["city_by_zipcode"]
    hop = finished["resolve_city_weather"]
    resolver = finished["city_weather"]
    lookup = finished["lookup_postal_code"]
    weather = finished["fetch_current_weather"]

    trace_id = 0x4BF92F3577B34DA6A3CE929D0E0E4736
    ours = (gateway, hop, resolver, lookup, weather)
    assert {s.context.trace_id for s in ours} == {trace_id}

    assert gateway.kind is SpanKind.SERVER
    assert gateway.parent.span_id == 0x00F067AA0BA902B7
    assert hop.parent.span_id == gateway.context.span_id
    # The resolver's server span hangs off the gateway's client span via `traceparent`.
    assert resolver.parent.span_id == hop.context.span_id
    assert lookup.parent.span_id == resolver.context.span_id
    assert weather.parent.span_id == resolver.context.span_id

    (viacep,) = upstreams.hits(VIACEP_HOST)
    assert viacep.headers["traceparent"].split("-")[1] == "4bf92f3577b34da6a3ce929d0e0e4736"


@pytest.mark.asyncio
async def test_errors_are_recorded_on_the_span(spans, resolver_settings, upstreams) -> None:
    upstreams.viacep_body = {"erro": True}

    async with running(
        create_resolver_app(settings=resolver_settings, transport=upstreams.transport())
    ) as client:
        r = await client.get("/city-weather", params={"zipcode": "99999999"})

    assert r.status_code == 422
    finished = _by_name(spans)
    for name in ("city_weather", "lookup_postal_code"):
        span = finished[name]
        assert span.status.status_code is StatusCode.ERROR
        (event,) = [e for e in span.events if e.name == "exception"]
        assert event.attributes["exception.type"].endswith("PostalCodeNotFoundError")
    assert "fetch_current_weather" not in finished


@pytest.mark.asyncio
async def test_validation_failure_is_recorded(spans, gateway_settings) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200))

    async with running(create_gateway_app(settings=gateway_settings, transport=transport)) as client:
        r = await client.post("/city-by-zipcode", json={"cep": "123"})

    assert r.status_code == 422
    finished = _by_name(spans)
    span = finished["city_by_zipcode"]
    assert span.status.status_code is StatusCode.ERROR
    # Rejected before any outbound call.
    assert "resolve_city_weather" not in finished


@pytest.mark.asyncio
async def test_outbound_call_carries_the_client_span(spans, gateway_settings) -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(
            200, json={"temp_C": 25.0, "temp_F": 77.0, "temp_K": 298.15, "city": "São Paulo"}
        )

    transport = httpx.MockTransport(handler)
    async with running(create_gateway_app(settings=gateway_settings, transport=transport)) as client:
        r = await client.post(
            "/city-by-zipcode", json={"cep": "01001000"}, headers={"traceparent": TRACEPARENT}
        )

    assert r.status_code == 200
    finished = _by_name(spans)
    gateway = finished["city_by_zipcode"]
    hop = finished["resolve_city_weather"]
    assert hop.kind is SpanKind.CLIENT
    assert hop.parent.span_id == gateway.context.span_id

    (call,) = calls
    _, trace_id, span_id, _ = call.headers["traceparent"].split("-")
    assert trace_id == "4bf92f3577b34da6a3ce929d0e0e4736"
    assert int(span_id, 16) == hop.context.span_id


def test_server_span_without_headers_starts_new_trace(spans) -> None:
    with server_span("standalone", {}) as span:
        headers = outbound_headers()

    (finished,) = spans.get_finished_spans()
    assert finished.parent is None
    assert headers["traceparent"].split("-")[2] == f"{span.get_span_context().span_id:016x}"


def test_tracer_provider_disabled_yields_nothing(resolver_settings) -> None:
    with tracer_provider(settings=resolver_settings) as provider:
        assert provider is None


def test_tracer_provider_flushes_on_exit(resolver_settings) -> None:
    settings = resolver_settings.model_copy(
        update={"tracing_enabled": True, "service_name": "resolver-under-test"}
    )
    exporter = InMemorySpanExporter()

    with tracer_provider(settings=settings, exporter=exporter) as provider:
        assert provider is not None
        provider.get_tracer("test").start_span("batched").end()

    (span,) = exporter.get_finished_spans()
    assert span.name == "batched"
    assert span.resource.attributes["service.name"] == "resolver-under-test"
