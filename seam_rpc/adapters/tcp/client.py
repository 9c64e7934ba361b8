"""
TCP client adapter

Implements the JSON-RPC 2.0 client over a plain TCP socket. Each call opens its
own connection, writes one JSON document and reads newline-delimited JSON
records until the server closes the connection. The last record wins.
"""

import asyncio
import logging
from typing import Any, Optional

from seam_rpc.adapters.address import Address
from seam_rpc.adapters.adapter_interface import ClientAdapterInterface
from seam_rpc.adapters.tcp.utils import RecordSplitter
from seam_rpc.errors import NoResponseError
from seam_rpc.rpc.request import CallOptions, Request
from seam_rpc.utils.serialization import encode_message

logger = logging.getLogger(__name__)

_NO_RECORD = object()


class ResponseProtocol(asyncio.Protocol):
    """
    Collects the response records of one call.

    ``done`` is a one-shot future: the first of end-of-stream, socket error,
    parse error or idle timeout settles it, every later event is ignored.
    """

    def __init__(self, timeout: float, call_id: Optional[str] = None, loop=None):
        """
        Args:
            timeout: Idle timeout in seconds, restarted whenever data arrives
            call_id: Caller label for debug logging
            loop: Event loop, defaults to the running loop
        """
        self.loop = loop or asyncio.get_running_loop()
        self.timeout = timeout
        self.call_id = call_id
        self.done = self.loop.create_future()
        self.transport = None
        self.response = _NO_RECORD
        self._splitter = RecordSplitter()
        self._timer = None

    def connection_made(self, transport):
        self.transport = transport
        self._restart_timer()

    def data_received(self, data: bytes):
        if self.done.done():
            return
        self._restart_timer()
        try:
            records = self._splitter.feed(data)
        except ValueError as e:
            self._fail(e)
            return
        if records:
            self.response = records[-1]

    def eof_received(self):
        self._finish()
        # Let the transport close itself
        return False

    def connection_lost(self, exc: Optional[Exception]):
        if exc is not None:
            self._fail(ConnectionError(f"Connection lost: {exc}"))
        else:
            self._finish()

    def _finish(self):
        if self.done.done():
            return
        try:
            for record in self._splitter.flush():
                self.response = record
        except ValueError as e:
            self._fail(e)
            return

        if self.response is _NO_RECORD:
            self._fail(NoResponseError("no response received before connection close"))
            return

        response = self.response if isinstance(self.response, dict) else {}
        if response.get("error") is not None:
            logger.warning(f"Response for {self.call_id} carries an error, ignored: {response['error']}")
        logger.debug(f"success {self.call_id}: {response.get('result')}")
        self._settle(result=response.get("result"))

    def _fail(self, error: Exception):
        if self.done.done():
            return
        logger.debug(f"error for {self.call_id}: {error}")
        self._settle(error=error)
        if self.transport is not None:
            self.transport.abort()

    def _settle(self, result: Any = None, error: Optional[Exception] = None):
        self.cancel_timer()
        if error is not None:
            self.done.set_exception(error)
        else:
            self.done.set_result(result)

    def _on_timeout(self):
        self._timer = None
        self._fail(TimeoutError(f"No data received for {self.timeout * 1000:.0f}ms"))

    def _restart_timer(self):
        self.cancel_timer()
        self._timer = self.loop.call_later(self.timeout, self._on_timeout)

    def cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


class TcpClient(ClientAdapterInterface):
    """
    TCP client adapter, implementing JSON-RPC 2.0 over newline-delimited JSON
    """

    adapter_type = "tcp"

    def __init__(self, address: Address, timeout_ms: int = 10000):
        """Initialize the TCP client

        Args:
            address: Target address (host and port are used)
            timeout_ms: Default connect and idle timeout (milliseconds)
        """
        super().__init__(address, timeout_ms)
        logger.info(f"TCP client targeting {address.host}:{address.port}")

    async def request(self, body: Request, options: CallOptions) -> Any:
        timeout = self.effective_timeout(options)
        loop = asyncio.get_running_loop()

        try:
            transport, protocol = await asyncio.wait_for(
                loop.create_connection(
                    lambda: ResponseProtocol(timeout, call_id=options.id, loop=loop),
                    self.address.host,
                    self.address.port,
                ),
                timeout,
            )
        except asyncio.TimeoutError as e:
            logger.debug(f"error for {options.id}: connect timeout")
            raise TimeoutError(
                f"TCP connect to {self.address.host}:{self.address.port} timed out ({timeout * 1000:.0f}ms)"
            ) from e
        except OSError as e:
            logger.debug(f"error for {options.id}: {e}")
            raise ConnectionError(f"TCP connect to {self.address.host}:{self.address.port} failed: {e}") from e

        try:
            transport.write(encode_message(body.to_dict(), newline=True))
            return await protocol.done
        finally:
            protocol.cancel_timer()
            if not protocol.done.done():
                protocol.done.cancel()
            transport.close()
