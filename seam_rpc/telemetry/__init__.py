"""
OpenTelemetry Integration Module

Provides tracing and metrics collection capabilities:
- tracer: Tracer setup and span creation
- metrics: Metrics collection

Both are no-ops until setup_tracer / setup_metrics install a provider.
"""

from .tracer import setup_tracer, create_span
from .metrics import setup_metrics, increment_counter, record_latency

# Alias for compatibility
get_tracer = setup_tracer

__all__ = [
    "setup_tracer",
    "get_tracer",
    "create_span",
    "setup_metrics",
    "increment_counter",
    "record_latency",
]
