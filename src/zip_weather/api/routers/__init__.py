"""
zip_weather.api.routers

Router modules for the gateway and resolver services.
"""

# Package marker.
