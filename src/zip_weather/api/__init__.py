"""
zip_weather.api

API package for the gateway and resolver services.

Responsibilities:
- FastAPI app factories and router modules.
- API-layer dependency wiring, error mapping and server bootstrap.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request parsing + tracing + delegation to clients/services.
