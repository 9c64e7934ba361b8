"""
TCP Adapter Package

Implements the JSON-RPC 2.0 client adapter over plain TCP sockets with
newline-delimited JSON responses.
"""

from seam_rpc.adapters.tcp.client import TcpClient, ResponseProtocol
from seam_rpc.adapters.tcp.utils import RecordSplitter, RECORD_DELIMITER

__all__ = ["TcpClient", "ResponseProtocol", "RecordSplitter", "RECORD_DELIMITER"]
