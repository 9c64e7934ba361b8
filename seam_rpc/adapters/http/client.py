"""
HTTP client adapter

Implements the JSON-RPC 2.0 client over HTTP: one POST per call, one JSON body back.
"""

import logging
from typing import Any, Optional

import httpx

from seam_rpc.adapters.address import Address
from seam_rpc.adapters.adapter_interface import ClientAdapterInterface
from seam_rpc.errors import RemoteError
from seam_rpc.rpc.request import CallOptions, Request
from seam_rpc.utils.serialization import decode_message, encode_message

logger = logging.getLogger(__name__)

# Legacy servers answer {"error": "not found"} for an empty result.
NOT_FOUND_SENTINEL = "not found"

JSON_HEADERS = {"Content-Type": "application/json"}


def _is_set(value: Any) -> bool:
    """Scalar errors are ignored when null, false, zero or empty"""
    return value is not None and value is not False and value != 0 and value != ""


def interpret_response(payload: Any) -> Any:
    """Turn a decoded response body into a result or a RemoteError

    Args:
        payload: Decoded response body; anything but an object counts as {}

    Returns:
        Any: The ``result`` member, or None when absent

    Raises:
        RemoteError: The body carries an error other than "not found"
    """
    if not isinstance(payload, dict):
        payload = {}

    error = payload.get("error")
    if isinstance(error, (dict, list)):
        # Any object counts as an error, even an empty one
        fields = error if isinstance(error, dict) else {}
        raise RemoteError(
            str(fields.get("message") or ""),
            code=fields.get("code"),
            data=fields.get("data"),
        )
    if _is_set(error) and error != NOT_FOUND_SENTINEL:
        raise RemoteError(str(error))

    return payload.get("result")


class HttpClient(ClientAdapterInterface):
    """
    HTTP client adapter, implementing JSON-RPC 2.0 over POST requests
    """

    adapter_type = "http"

    def __init__(self,
                 address: Address,
                 timeout_ms: int = 10000,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize the HTTP client

        Args:
            address: Target address; the formatted URI is posted to
            timeout_ms: Default request timeout (milliseconds)
            transport: Custom httpx transport, e.g. httpx.MockTransport in tests
        """
        super().__init__(address, timeout_ms)
        self._transport = transport
        logger.info(f"HTTP client targeting {address.uri}")

    async def request(self, body: Request, options: CallOptions) -> Any:
        timeout = self.effective_timeout(options)

        try:
            # One session per call, no connection reuse between calls
            async with httpx.AsyncClient(transport=self._transport, timeout=timeout) as session:
                response = await session.post(
                    self.address.uri,
                    content=encode_message(body.to_dict()),
                    headers=JSON_HEADERS,
                )
        except httpx.TimeoutException as e:
            logger.debug(f"error for {options.id}: {e}")
            raise TimeoutError(f"HTTP request to {self.address.uri} timed out ({timeout * 1000:.0f}ms)") from e
        except httpx.TransportError as e:
            logger.debug(f"error for {options.id}: {e}")
            raise ConnectionError(f"HTTP request to {self.address.uri} failed: {e}") from e

        content = response.content
        payload = {}
        if content.strip():
            try:
                payload = decode_message(content)
            except ValueError as e:
                logger.debug(f"error for {options.id}: unparsable body treated as empty: {e}")

        try:
            result = interpret_response(payload)
        except RemoteError as e:
            logger.debug(f"error for {options.id}: {e.message}")
            raise

        logger.debug(f"success {options.id}: {result}")
        return result
