"""
JSON-RPC 2.0 Implementation Module

Provides the request side of the JSON-RPC 2.0 convention:
- request: request construction and per-call options

This module is independent of the underlying transport adapters.
"""

from .request import CallOptions, Request, prepare_request, generate_request_id

__all__ = [
    "CallOptions",
    "Request",
    "prepare_request",
    "generate_request_id",
]
