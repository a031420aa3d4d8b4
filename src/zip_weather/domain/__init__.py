"""
zip_weather.domain

Domain package.

Responsibilities:
- Request/response and upstream payload models.
- Pure helpers (postal code validation, temperature conversion).
"""

# Package marker.
