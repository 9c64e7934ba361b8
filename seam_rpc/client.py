"""
JSON-RPC 2.0 client

The single public entry point. The transport adapter is chosen once from the
address scheme; every call then builds a request, times the round trip,
delegates to the adapter and reports one record to the caller's log hook.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

import httpx

from seam_rpc.adapters.address import parse_address
from seam_rpc.adapters.adapter_factory import AdapterFactory
from seam_rpc.config import ClientConfig, DEFAULT_TIMEOUT_MS
from seam_rpc.errors import RemoteError
from seam_rpc.rpc.request import CallOptions, prepare_request
from seam_rpc.telemetry.metrics import increment_counter, record_latency
from seam_rpc.telemetry.tracer import create_span

logger = logging.getLogger(__name__)

LogHook = Callable[[Dict[str, Any]], None]


def _noop_log_hook(record: Dict[str, Any]) -> None:
    pass


def _error_type(error: BaseException) -> str:
    if isinstance(error, RemoteError):
        return "rpc_error"
    if isinstance(error, TimeoutError):
        return "timeout"
    if isinstance(error, ConnectionError):
        return "connection"
    if isinstance(error, ValueError):
        return "invalid_response"
    return "unknown"


class Client:
    """
    JSON-RPC 2.0 client speaking HTTP or newline-delimited JSON over TCP

    Example:
        client = Client("tcp://127.0.0.1:7000", timeout_ms=2000)
        result = await client.call("add", [1, 2])
    """

    def __init__(self,
                 address: str,
                 timeout_ms: Optional[int] = DEFAULT_TIMEOUT_MS,
                 log_hook: Optional[LogHook] = None,
                 http_transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize the client

        Args:
            address: Target URI; the "tcp" scheme selects the TCP adapter,
                any other scheme the HTTP adapter. The port defaults to 80.
            timeout_ms: Default per-call timeout in milliseconds
            log_hook: Callable receiving one record per completed call
            http_transport: Custom httpx transport for the HTTP adapter
        """
        self.address = parse_address(address)
        self.timeout_ms = timeout_ms or DEFAULT_TIMEOUT_MS
        self.log_hook = log_hook or _noop_log_hook
        self.adapter = AdapterFactory.create_client(
            self.address,
            timeout_ms=self.timeout_ms,
            http_transport=http_transport,
        )

    @classmethod
    def from_config(cls, address: str, config: ClientConfig, log_hook: Optional[LogHook] = None) -> "Client":
        """Create a client from a ClientConfig"""
        return cls(address, timeout_ms=config.timeout_ms, log_hook=log_hook)

    @property
    def adapter_type(self) -> str:
        return self.adapter.adapter_type

    async def call(self,
                   method: str,
                   params: Any = (),
                   *,
                   timeout_ms: Optional[int] = None,
                   is_async: bool = False,
                   call_id: Optional[str] = None) -> Any:
        """Invoke a remote method

        Args:
            method: Method name
            params: A list/tuple of positional parameters, or a single value
                which is sent as a one-element list
            timeout_ms: Overrides the client default timeout
            is_async: Send as a notification (id is null)
            call_id: Label used to correlate debug log lines

        Returns:
            Any: The ``result`` member of the response

        Raises:
            TimeoutError: Request timed out
            ConnectionError: Connection failed or closed without a response
            ValueError: Response is not valid JSON
            RemoteError: The server returned a JSON-RPC error
        """
        options = CallOptions(timeout_ms=timeout_ms, is_async=is_async, id=call_id)
        request = prepare_request(method, params, options)
        attributes = {"method": method, "adapter": self.adapter_type}

        increment_counter("rpc.client.requests", 1, attributes)
        start_time = time.perf_counter()

        with create_span(f"rpc.client.{self.adapter_type}", {"rpc.method": method, "server.address": self.address.host}):
            try:
                result = await self.adapter.request(request, options)
            except Exception as e:
                duration = (time.perf_counter() - start_time) * 1000
                self.log(method, params, duration, None, e)
                increment_counter("rpc.client.errors", 1, {**attributes, "type": _error_type(e)})
                raise

        duration = (time.perf_counter() - start_time) * 1000
        record_latency("rpc.client.latency", duration, attributes)
        increment_counter("rpc.client.success", 1, attributes)
        self.log(method, params, duration, result, None)
        return result

    def log(self, method: str, params: Any, duration: float, result: Any, error: Optional[BaseException]) -> None:
        """Forward one call record to the log hook

        Exceptions raised by the hook are logged and never replace the call outcome.
        """
        record = {
            "addr": str(self.address),
            "method": method,
            "params": params,
            "duration": duration,
            "result": result,
            "error": error,
        }
        try:
            self.log_hook(record)
        except Exception:
            logger.exception(f"Log hook failed for {method}")
