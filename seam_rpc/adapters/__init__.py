"""
Transport Adapters Module

Adapter implementations providing a unified interface for the supported transports:
- http: JSON-RPC 2.0 over HTTP POST
- tcp: newline-delimited JSON-RPC 2.0 over a plain TCP socket

The adapter is selected from the address scheme by AdapterFactory.
"""

from .address import Address, parse_address
from .adapter_factory import AdapterFactory, AdapterType
from .adapter_interface import ClientAdapterInterface

__all__ = [
    "Address",
    "parse_address",
    "AdapterFactory",
    "AdapterType",
    "ClientAdapterInterface",
]
