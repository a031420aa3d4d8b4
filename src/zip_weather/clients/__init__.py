"""
zip_weather.clients

Outbound HTTP client package.

Responsibilities:
- Wrap each upstream (ViaCEP, WeatherAPI, resolver service) behind a typed client.
- Translate transport/status/decoding failures into `zip_weather.errors` types.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services depend on these clients, never on httpx responses directly.
