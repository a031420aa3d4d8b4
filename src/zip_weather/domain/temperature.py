"""
zip_weather.domain.temperature

Temperature scale conversions.

Values pass through floating point untouched; callers decide on rounding (none today).
"""

from __future__ import annotations


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def celsius_to_kelvin(celsius: float) -> float:
    return celsius + 273.15
