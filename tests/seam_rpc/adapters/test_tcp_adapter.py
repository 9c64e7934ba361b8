"""
TCP adapter contract tests

Run the adapter against local asyncio servers and drive the response protocol directly.
"""
import asyncio
import json
import logging
import socket
import time
from contextlib import asynccontextmanager
from unittest.mock import Mock

import pytest

from seam_rpc.adapters.address import parse_address
from seam_rpc.adapters.tcp.client import ResponseProtocol, TcpClient
from seam_rpc.errors import NoResponseError
from seam_rpc.rpc.request import CallOptions, prepare_request


@asynccontextmanager
async def serve(handler):
    """Run a TCP server on a free local port and yield its address"""
    server = await asyncio.start_server(handler, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        yield f"tcp://127.0.0.1:{port}"
    finally:
        server.close()
        await server.wait_closed()


def reply_with(*chunks: bytes, received=None):
    """Handler that reads the request line, writes chunks and closes"""
    async def handler(reader, writer):
        line = await reader.readline()
        if received is not None:
            received.append(line)
        for chunk in chunks:
            writer.write(chunk)
            await writer.drain()
            await asyncio.sleep(0.01)
        writer.close()
    return handler


async def send(address, method="echo", params=(), options=None, timeout_ms=2000):
    client = TcpClient(parse_address(address), timeout_ms=timeout_ms)
    options = options or CallOptions()
    return await client.request(prepare_request(method, params, options), options)


def free_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class TestTcpRoundTrip:
    """Test calls against a live local server"""

    @pytest.mark.asyncio
    async def test_single_record(self):
        async with serve(reply_with(b'{"result": "ok"}\n')) as address:
            assert await send(address) == "ok"

    @pytest.mark.asyncio
    async def test_request_is_one_json_line(self):
        received = []
        async with serve(reply_with(b'{"result": 3}\n', received=received)) as address:
            assert await send(address, "add", [1, 2]) == 3

        assert received[0].endswith(b"\n")
        body = json.loads(received[0])
        assert body["jsonrpc"] == "2.0"
        assert body["method"] == "add"
        assert body["params"] == [1, 2]
        assert body["id"]

    @pytest.mark.asyncio
    async def test_last_record_wins(self):
        async with serve(reply_with(b'{"result": "first"}\n', b'{"result": "second"}\n')) as address:
            assert await send(address) == "second"

    @pytest.mark.asyncio
    async def test_unterminated_final_record(self):
        async with serve(reply_with(b'{"result": 1}\n{"result": 2}')) as address:
            assert await send(address) == 2

    @pytest.mark.asyncio
    async def test_record_split_across_chunks(self):
        async with serve(reply_with(b'{"resu', b'lt": [1, 2', b']}\r\n')) as address:
            assert await send(address) == [1, 2]

    @pytest.mark.asyncio
    async def test_record_without_result(self):
        async with serve(reply_with(b'{"jsonrpc": "2.0"}\n')) as address:
            assert await send(address) is None

    @pytest.mark.asyncio
    async def test_error_field_is_not_raised(self, caplog):
        async with serve(reply_with(b'{"error": {"message": "bad"}}\n')) as address:
            with caplog.at_level(logging.WARNING, logger="seam_rpc.adapters.tcp.client"):
                assert await send(address) is None
        assert "carries an error" in caplog.text


class TestTcpFailures:
    """Test failure paths"""

    @pytest.mark.asyncio
    async def test_close_without_response(self):
        async with serve(reply_with()) as address:
            with pytest.raises(NoResponseError, match="no response received"):
                await send(address)

    @pytest.mark.asyncio
    async def test_no_response_is_a_connection_error(self):
        async with serve(reply_with()) as address:
            with pytest.raises(ConnectionError):
                await send(address)

    @pytest.mark.asyncio
    async def test_invalid_record(self):
        async with serve(reply_with(b'not json\n')) as address:
            with pytest.raises(ValueError):
                await send(address)

    @pytest.mark.asyncio
    async def test_timeout(self):
        async def silent(reader, writer):
            await reader.read()
            writer.close()

        async with serve(silent) as address:
            start = time.monotonic()
            with pytest.raises(TimeoutError):
                await send(address, timeout_ms=200)
            assert time.monotonic() - start < 5

    @pytest.mark.asyncio
    async def test_per_call_timeout_overrides_default(self):
        async def silent(reader, writer):
            await reader.read()
            writer.close()

        async with serve(silent) as address:
            with pytest.raises(TimeoutError):
                await send(address, options=CallOptions(timeout_ms=100), timeout_ms=60000)

    @pytest.mark.asyncio
    async def test_connection_refused(self):
        with pytest.raises(ConnectionError):
            await send(f"tcp://127.0.0.1:{free_port()}")

    @pytest.mark.asyncio
    async def test_cancellation_closes_connection(self):
        closed = asyncio.Event()

        async def silent(reader, writer):
            await reader.read()
            closed.set()
            writer.close()

        async with serve(silent) as address:
            task = asyncio.ensure_future(send(address))
            await asyncio.sleep(0.1)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
            await asyncio.wait_for(closed.wait(), 2)


class TestResponseProtocol:
    """Test that completion fires exactly once whatever the event sequence"""

    @pytest.mark.asyncio
    async def test_events_after_end_are_ignored(self):
        protocol = ResponseProtocol(timeout=5)
        protocol.connection_made(Mock())

        protocol.data_received(b'{"result": 1}\n')
        protocol.eof_received()
        protocol.connection_lost(ConnectionResetError("reset"))
        protocol.data_received(b'{"result": 2}\n')
        protocol.eof_received()

        assert protocol.done.result() == 1

    @pytest.mark.asyncio
    async def test_error_then_end(self):
        transport = Mock()
        protocol = ResponseProtocol(timeout=5)
        protocol.connection_made(transport)

        protocol.connection_lost(ConnectionResetError("reset"))
        protocol.data_received(b'{"result": 1}\n')
        protocol.eof_received()
        protocol.connection_lost(None)

        with pytest.raises(ConnectionError, match="reset"):
            protocol.done.result()
        transport.abort.assert_called_once()

    @pytest.mark.asyncio
    async def test_end_without_records(self):
        protocol = ResponseProtocol(timeout=5)
        protocol.connection_made(Mock())
        protocol.eof_received()
        protocol.connection_lost(None)

        with pytest.raises(NoResponseError):
            protocol.done.result()

    @pytest.mark.asyncio
    async def test_idle_timeout(self):
        transport = Mock()
        protocol = ResponseProtocol(timeout=0.05)
        protocol.connection_made(transport)

        with pytest.raises(TimeoutError):
            await asyncio.wait_for(protocol.done, 2)
        transport.abort.assert_called_once()

        protocol.data_received(b'{"result": 1}\n')
        protocol.eof_received()
        assert isinstance(protocol.done.exception(), TimeoutError)

    @pytest.mark.asyncio
    async def test_data_restarts_idle_timer(self):
        protocol = ResponseProtocol(timeout=0.2)
        protocol.connection_made(Mock())

        for _ in range(3):
            await asyncio.sleep(0.1)
            protocol.data_received(b'{"result": "tick"}\n')
        assert not protocol.done.done()

        protocol.eof_received()
        assert protocol.done.result() == "tick"
