"""
zip_weather.api.routers.gateway

Public gateway endpoint.

Responsibilities:
- Parse and validate the `{"cep": ...}` body.
- Forward valid postal codes to the resolver and return its report.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from zip_weather.api.deps import resolver_client_dep
from zip_weather.api.disconnect import cancel_on_disconnect
from zip_weather.clients.resolver import ResolverClient
from zip_weather.domain.models import PostalCodeRequest, TemperatureReport
from zip_weather.domain.postal_code import ensure_valid_postal_code
from zip_weather.errors import InputValidationError
from zip_weather.observability.tracing import server_span

router = APIRouter(tags=["gateway"])


@router.post("/city-by-zipcode", response_model=TemperatureReport)
async def city_by_zipcode(
    request: Request,
    client: ResolverClient = Depends(resolver_client_dep),
) -> TemperatureReport:
    with server_span("city_by_zipcode", request.headers) as span:
        # Body is parsed by hand: a bad body is a 400 here, not FastAPI's default 422.
        raw = await request.body()
        try:
            body = PostalCodeRequest.model_validate_json(raw)
        except ValidationError as e:
            raise InputValidationError("invalid request body") from e

        span.set_attribute("zipcode", body.postal_code)
        ensure_valid_postal_code(body.postal_code)

        return await cancel_on_disconnect(
            request, client.city_weather(postal_code=body.postal_code)
        )
