"""
OpenTelemetry Metrics Collection

Provides functionality for collecting and exporting client call metrics.
"""

import logging
from typing import Dict, Any, Optional

from opentelemetry import metrics
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter

logger = logging.getLogger(__name__)

INSTRUMENT_DESCRIPTIONS = {
    "rpc.client.requests": "JSON-RPC calls started",
    "rpc.client.success": "JSON-RPC calls that returned a result",
    "rpc.client.errors": "JSON-RPC calls that failed, by error type",
    "rpc.client.latency": "Round trip of successful JSON-RPC calls",
}

# Cached instruments
_counters = {}
_histograms = {}


def setup_metrics(service_name: str, otlp_endpoint: str = "localhost:4317", export_interval_ms: int = 5000):
    """Configure OpenTelemetry metrics collection

    Args:
        service_name: Service name
        otlp_endpoint: OTLP receiver address
        export_interval_ms: Metrics export interval in milliseconds
    """
    otlp_reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=otlp_endpoint),
        export_interval_millis=export_interval_ms
    )

    provider = MeterProvider(
        metric_readers=[otlp_reader],
        resource=Resource.create({"service.name": service_name}),
    )

    # Set global MeterProvider
    metrics.set_meter_provider(provider)

    meter = metrics.get_meter(service_name)

    logger.info(f"OpenTelemetry metrics configured, service name: {service_name}, OTLP endpoint: {otlp_endpoint}")

    return meter


def get_counter(name: str, description: Optional[str] = None, unit: str = "1"):
    """Get or create a call counter, e.g. rpc.client.requests

    Args:
        name: Counter name
        description: Defaults to the known rpc.client.* description
        unit: Counter unit (default "1", one per call)
    """
    if name not in _counters:
        meter = metrics.get_meter(__name__)
        _counters[name] = meter.create_counter(
            name=name,
            description=description or INSTRUMENT_DESCRIPTIONS.get(name, name),
            unit=unit
        )

    return _counters[name]


def get_histogram(name: str, description: Optional[str] = None, unit: str = "ms"):
    """Get or create a round-trip histogram, e.g. rpc.client.latency"""
    if name not in _histograms:
        meter = metrics.get_meter(__name__)
        _histograms[name] = meter.create_histogram(
            name=name,
            description=description or INSTRUMENT_DESCRIPTIONS.get(name, name),
            unit=unit
        )

    return _histograms[name]


def increment_counter(name: str, amount: int = 1, attributes: Dict[str, Any] = None):
    """Count calls; attributes carry method, adapter and, for errors, type"""
    get_counter(name).add(amount, attributes or {})


def record_latency(name: str, value_ms: float, attributes: Dict[str, Any] = None):
    """Record the round trip of a successful call in milliseconds"""
    get_histogram(name).record(value_ms, attributes or {})
