"""
Core module for shared domain infrastructure.

This module contains:
- Domain exceptions and value objects
- Prometheus metrics and OpenTelemetry setup
- Middleware components
- Health and metrics views
"""
