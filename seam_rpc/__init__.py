"""
seam_rpc - JSON-RPC 2.0 client over HTTP and TCP

The client chooses its transport once from the address scheme and offers the
same asynchronous call contract for both:

1. Request construction: JSON-RPC 2.0 objects with random correlation ids
2. Adapters:
   - tcp: newline-delimited JSON over a plain socket, one connection per call
   - http: JSON body in an HTTP POST
3. Instrumentation: per-call log hook, OpenTelemetry metrics and spans
"""

from seam_rpc.client import Client
from seam_rpc.config import ClientConfig
from seam_rpc.errors import SeamRpcError, RemoteError, NoResponseError, UnsupportedAddressError

__version__ = "0.1.0"

__all__ = [
    "Client",
    "ClientConfig",
    "SeamRpcError",
    "RemoteError",
    "NoResponseError",
    "UnsupportedAddressError",
]
