"""
zip_weather.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation for consistent log enrichment.
- OpenTelemetry tracer provider lifecycle and trace-context propagation.
"""

# Package marker.
