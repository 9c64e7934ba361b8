"""
Adapter factory

Creates the transport adapter for a client address. The URI scheme decides:
"tcp" selects the TCP adapter, anything else the HTTP adapter.
"""

import logging
from typing import Optional

import httpx

from seam_rpc.adapters.address import Address
from seam_rpc.adapters.adapter_interface import ClientAdapterInterface
from seam_rpc.adapters.http.client import HttpClient
from seam_rpc.adapters.tcp.client import TcpClient

logger = logging.getLogger(__name__)


class AdapterType:
    """Adapter type constants"""
    HTTP = "http"
    TCP = "tcp"


class AdapterFactory:
    """Adapter factory, used to create transport adapter instances"""

    @staticmethod
    def adapter_type_for(address: Address) -> str:
        if address.scheme == AdapterType.TCP:
            return AdapterType.TCP
        return AdapterType.HTTP

    @staticmethod
    def create_client(address: Address,
                      timeout_ms: int,
                      http_transport: Optional[httpx.AsyncBaseTransport] = None) -> ClientAdapterInterface:
        """Create a client adapter

        Args:
            address: Parsed target address
            timeout_ms: Default request timeout (milliseconds)
            http_transport: Custom httpx transport for the HTTP adapter

        Returns:
            ClientAdapterInterface: Client adapter instance
        """
        adapter_type = AdapterFactory.adapter_type_for(address)
        logger.debug(f"Selected {adapter_type} adapter for {address}")

        if adapter_type == AdapterType.TCP:
            return TcpClient(address, timeout_ms=timeout_ms)
        return HttpClient(address, timeout_ms=timeout_ms, transport=http_transport)
