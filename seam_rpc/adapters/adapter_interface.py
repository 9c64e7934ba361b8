"""
Transport adapter interface

Defines the interface implemented by every client transport adapter (HTTP, TCP).
The call facade only talks to this interface, so the transport is chosen once
and never re-evaluated per call.
"""

import abc
from typing import Any

from seam_rpc.adapters.address import Address
from seam_rpc.rpc.request import CallOptions, Request


class ClientAdapterInterface(abc.ABC):
    """Client adapter interface, defining the methods every transport must implement"""

    adapter_type: str = ""

    def __init__(self, address: Address, timeout_ms: int):
        """Initialize the adapter

        Args:
            address: Parsed target address
            timeout_ms: Default request timeout (milliseconds)
        """
        self.address = address
        self.timeout_ms = timeout_ms

    def effective_timeout(self, options: CallOptions) -> float:
        """Return the timeout for one call in seconds"""
        return (options.timeout_ms or self.timeout_ms) / 1000.0

    @abc.abstractmethod
    async def request(self, body: Request, options: CallOptions) -> Any:
        """Send a JSON-RPC request and wait for its result

        Args:
            body: Request to send
            options: Per-call options

        Returns:
            Any: The ``result`` member of the response

        Raises:
            TimeoutError: Request timed out
            ConnectionError: Connection failed
            ValueError: Response is not valid JSON
            RemoteError: The server returned a JSON-RPC error
        """
        pass
