"""
JSON-RPC 2.0 request construction

Builds canonical request objects: id assignment and parameter normalization.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

JSONRPC_VERSION = "2.0"


@dataclass
class CallOptions:
    """Per-call options

    Attributes:
        timeout_ms: Overrides the client default timeout when set
        is_async: Send as a notification (no id)
        id: Caller label used only for debug log correlation
    """
    timeout_ms: Optional[int] = None
    is_async: bool = False
    id: Optional[str] = None


@dataclass
class Request:
    """A single JSON-RPC 2.0 request"""
    method: str
    params: List[Any] = field(default_factory=list)
    id: Optional[str] = None
    jsonrpc: str = JSONRPC_VERSION

    @property
    def is_notification(self) -> bool:
        return self.id is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire representation"""
        return {
            "jsonrpc": self.jsonrpc,
            "method": self.method,
            "params": self.params,
            "id": self.id,
        }


def generate_request_id() -> str:
    """Return a random correlation token (16 random bytes, hex encoded)."""
    return uuid.uuid4().hex


def prepare_request(method: str, params: Any = (), options: Optional[CallOptions] = None) -> Request:
    """Build a JSON-RPC request

    Args:
        method: Method name
        params: A list or tuple is sent as-is; any other value is wrapped
            into a single-element list
        options: Per-call options; ``is_async`` suppresses the id

    Returns:
        Request: The request to send
    """
    if options is None:
        options = CallOptions()

    if isinstance(params, list):
        normalized = params
    elif isinstance(params, tuple):
        normalized = list(params)
    else:
        normalized = [params]

    request_id = None if options.is_async else generate_request_id()
    return Request(method=method, params=normalized, id=request_id)
