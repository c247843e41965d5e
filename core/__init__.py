"""
Core module shared by the licensing app.

This module contains:
- Domain exceptions and deployment value objects
- Inter-instance command channels (in-memory and RabbitMQ)
- Prometheus metrics and OpenTelemetry instrumentation
- Health and readiness views
"""
