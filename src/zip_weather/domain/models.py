"""
zip_weather.domain.models

Pydantic models for the request chain.

Responsibilities:
- Define the gateway request body (`PostalCodeRequest`).
- Define upstream payloads (`LocalityRecord` from ViaCEP, `WeatherReading` from WeatherAPI).
- Define the response shared by both services (`TemperatureReport`).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from zip_weather.domain.temperature import celsius_to_fahrenheit, celsius_to_kelvin


class PostalCodeRequest(BaseModel):
    postal_code: str = Field(alias="cep")


class LocalityRecord(BaseModel):
    """
    ViaCEP lookup result. Only `locality` is consumed downstream.
    """

    model_config = ConfigDict(populate_by_name=True)

    code: str = Field(default="", alias="cep")
    street: str = Field(default="", alias="logradouro")
    complement: str = Field(default="", alias="complemento")
    district: str = Field(default="", alias="bairro")
    locality: str = Field(default="", alias="localidade")
    region_code: str = Field(default="", alias="uf")
    ibge: str = ""
    gia: str = ""
    ddd: str = ""
    siafi: str = ""
    # ViaCEP answers 200 with {"erro": true} (or "true") for unknown codes.
    error: bool = Field(default=False, alias="erro")

    @property
    def not_found(self) -> bool:
        return self.error or not self.locality.strip()


class WeatherLocation(BaseModel):
    name: str = ""
    region: str = ""
    country: str = ""
    lat: float = 0.0
    lon: float = 0.0
    tz_id: str = ""
    localtime_epoch: int = 0
    localtime: str = ""


class CurrentConditions(BaseModel):
    temp_c: float


class WeatherReading(BaseModel):
    location: WeatherLocation = Field(default_factory=WeatherLocation)
    current: CurrentConditions


class TemperatureReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    celsius: float = Field(alias="temp_C")
    fahrenheit: float = Field(alias="temp_F")
    kelvin: float = Field(alias="temp_K")
    city: str

    @classmethod
    def from_celsius(cls, *, celsius: float, city: str) -> TemperatureReport:
        return cls(
            celsius=celsius,
            fahrenheit=celsius_to_fahrenheit(celsius),
            kelvin=celsius_to_kelvin(celsius),
            city=city,
        )


# --- Module Notes -----------------------------------------------------------
# Wire names stay as aliases; serialize with `by_alias=True` (FastAPI does this
# for `response_model` automatically).
