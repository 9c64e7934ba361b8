"""Common exceptions for the seam_rpc client."""

from typing import Any, Optional


class SeamRpcError(Exception):
    pass


class RemoteError(SeamRpcError):
    """Raised when the server answers with a JSON-RPC error.

    Attributes:
        message: Error message from the server
        code: JSON-RPC error code (None for legacy string errors)
        data: Additional error data (None for legacy string errors)
    """

    def __init__(self, message: str, code: Optional[int] = None, data: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data


class NoResponseError(SeamRpcError, ConnectionError):
    """Raised when a TCP peer closes the connection without sending a record."""


class UnsupportedAddressError(SeamRpcError, ValueError):
    """Raised when the target address cannot be used by any adapter."""
