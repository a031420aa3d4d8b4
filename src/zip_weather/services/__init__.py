"""
zip_weather.services

Service layer package.

Responsibilities:
- Compose upstream clients into the resolver's lookup pipeline.
"""

# Package marker.
