"""
Stdio transport for the Penumbra tool server.

The server is a standalone process that:
1. Reads JSON-RPC 2.0 requests from stdin, one per line
2. Hands tool calls to the Dispatcher
3. Writes JSON-RPC responses to stdout, one per line

Usage:

    from penumbra_mcp.server import StdioToolServer

    server = StdioToolServer(dispatcher)
    server.run()

Requests are handled one at a time. A bad request never closes the
connection; only EOF on stdin or SIGINT/SIGTERM does.
"""

from __future__ import annotations

import asyncio
import json
import logging
import signal
import sys
from contextlib import suppress
from typing import Any, Awaitable, Callable, TextIO

from penumbra_mcp.dispatcher import Dispatcher
from penumbra_mcp.errors import ErrorCode, ProtocolError

logger = logging.getLogger(__name__)

SERVER_NAME = "penumbra-mcp"
SERVER_VERSION = "0.1.0"
DEFAULT_PROTOCOL_VERSION = "2024-11-05"
MAX_LINE_BYTES = 16 * 1024 * 1024


class StdioToolServer:
    """
    JSON-RPC tool server that communicates via stdin/stdout.

    Protocol:
    - One JSON-RPC message per line
    - Supports methods:
        - "initialize" → protocol handshake
        - "ping"       → health check
        - "tools/list" → returns the tool catalog
        - "tools/call" → calls a tool by name with arguments
    - Messages without an "id" are notifications and get no response
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        output: TextIO | None = None,
        on_close: Callable[[], Awaitable[None]] | None = None,
    ):
        self._dispatcher = dispatcher
        self._output = output
        self._on_close = on_close

    def run(self) -> None:
        """
        Serve stdin/stdout until stdin closes or the process is interrupted.

        This blocks until shutdown.
        """
        asyncio.run(self._run_stdio())

    async def _run_stdio(self) -> None:
        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader(limit=MAX_LINE_BYTES)
        await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)

        stop = asyncio.Event()
        for sig in (signal.SIGINT, signal.SIGTERM):
            with suppress(NotImplementedError):
                loop.add_signal_handler(sig, stop.set)

        await self.serve(reader, stop)

    async def serve(self, reader: asyncio.StreamReader, stop: asyncio.Event | None = None) -> None:
        """Read and answer messages until EOF or until stop is set."""
        stop = stop or asyncio.Event()
        tools = [d.name for d in self._dispatcher.list_tools()]
        logger.info(f"Tool server starting with {len(tools)} tools: {tools}")

        try:
            while not stop.is_set():
                read = asyncio.ensure_future(reader.readline())
                stopped = asyncio.ensure_future(stop.wait())
                done, _ = await asyncio.wait({read, stopped}, return_when=asyncio.FIRST_COMPLETED)

                if read not in done:
                    read.cancel()
                    logger.info("Shutdown requested")
                    break
                stopped.cancel()

                try:
                    line = read.result()
                except ValueError as e:
                    # over-long line; the reader has already discarded it
                    logger.warning(f"Dropped oversized request: {e}")
                    self._write(self._error(
                        None, ProtocolError(ErrorCode.INVALID_REQUEST, "Invalid Request: message too large")
                    ))
                    continue
                if not line:
                    logger.info("stdin closed")
                    break

                response = await self.handle_line(line)
                if response is not None:
                    self._write(response)
        finally:
            if self._on_close is not None:
                await self._on_close()
            logger.info("Tool server stopped")

    async def handle_line(self, line: bytes | str) -> dict | None:
        """Decode one line and return the response message, if any."""
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")
        line = line.strip()
        if not line:
            return None

        try:
            message = json.loads(line)
        except json.JSONDecodeError as e:
            return self._error(None, ProtocolError(ErrorCode.PARSE_ERROR, f"Parse error: {e}"))

        return await self.handle_message(message)

    async def handle_message(self, message: Any) -> dict | None:
        """Answer one decoded JSON-RPC message."""
        if not isinstance(message, dict) or not isinstance(message.get("method"), str):
            request_id = message.get("id") if isinstance(message, dict) else None
            return self._error(
                request_id,
                ProtocolError(ErrorCode.INVALID_REQUEST, "Invalid Request: expected an object with a method"),
            )

        is_notification = "id" not in message
        request_id = message.get("id")
        method = message["method"]
        params = message.get("params")
        if params is None:
            params = {}

        try:
            result = await self._dispatch(method, params)
        except ProtocolError as e:
            logger.warning(f"{method} rejected: {e.message}")
            return None if is_notification else self._error(request_id, e)
        except Exception as e:
            logger.exception(f"Internal error while handling {method}")
            return None if is_notification else self._error(
                request_id, ProtocolError(ErrorCode.INTERNAL_ERROR, str(e) or "Internal error")
            )

        if is_notification:
            return None
        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    async def _dispatch(self, method: str, params: Any) -> Any:
        """Route a method call to the appropriate handler."""
        if method.startswith("notifications/"):
            return None

        if not isinstance(params, dict):
            raise ProtocolError.invalid_params("params must be an object")

        if method == "initialize":
            return {
                "protocolVersion": params.get("protocolVersion", DEFAULT_PROTOCOL_VERSION),
                "capabilities": {"tools": {}},
                "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
            }

        if method == "ping":
            return {"status": "ok", "tools": [d.name for d in self._dispatcher.list_tools()]}

        if method == "tools/list":
            return {"tools": [d.to_dict() for d in self._dispatcher.list_tools()]}

        if method == "tools/call":
            tool_name = params.get("name")
            if not isinstance(tool_name, str):
                raise ProtocolError.invalid_params("tools/call requires a string 'name'")
            envelope = await self._dispatcher.dispatch(tool_name, params.get("arguments"))
            return envelope.to_dict()

        raise ProtocolError.method_not_found(f"Unknown method: '{method}'")

    @staticmethod
    def _error(request_id: Any, error: ProtocolError) -> dict:
        return {"jsonrpc": "2.0", "id": request_id, "error": error.to_dict()}

    def _write(self, response: dict) -> None:
        """Write a JSON-RPC response to stdout."""
        output = self._output or sys.stdout
        output.write(json.dumps(response) + "\n")
        output.flush()
