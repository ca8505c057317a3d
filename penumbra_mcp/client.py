"""
Client for a Penumbra tool server running as a subprocess.

Usage:
    client = PenumbraToolClient()
    client.start()                      # launch + handshake + discover tools

    envelope = client.call("get_chain_status", {})
    print(envelope["content"][0]["text"])

    client.stop()
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from penumbra_mcp.errors import ToolCallError
from penumbra_mcp.server import DEFAULT_PROTOCOL_VERSION
from penumbra_mcp.transport import JsonRpcRequest, StdioTransport

logger = logging.getLogger(__name__)

CLIENT_INFO = {"name": "penumbra-mcp-client", "version": "0.1.0"}


class PenumbraToolClient:
    """Owns one server process and forwards tool calls to it."""

    def __init__(self, command: list[str] | None = None, env: dict[str, str] | None = None):
        self.command = command or [sys.executable, "-m", "penumbra_mcp"]
        self._transport = StdioTransport(self.command, env)
        self._tools: list[dict] = []
        self.server_info: dict = {}

    def __enter__(self) -> "PenumbraToolClient":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def _request(self, method: str, params: dict[str, Any]) -> Any:
        request = JsonRpcRequest(method=method, params=params, id=self._transport.next_id())
        response = self._transport.send(request)
        if response.is_error:
            raise ToolCallError(response.error.get("code", 0), response.error.get("message", ""))
        return response.result

    def start(self) -> list[dict]:
        """
        Start the server, run the initialize handshake and discover tools.

        Returns:
            List of tool descriptors from the server.
        """
        self._transport.start()

        init = self._request(
            "initialize",
            {
                "protocolVersion": DEFAULT_PROTOCOL_VERSION,
                "capabilities": {},
                "clientInfo": CLIENT_INFO,
            },
        )
        self.server_info = init.get("serverInfo", {})
        self._transport.notify("notifications/initialized")

        self._tools = self._request("tools/list", {}).get("tools", [])
        logger.info(f"Connected to {self.server_info.get('name', 'server')}: "
                    f"tools={[t['name'] for t in self._tools]}")
        return self._tools

    def stop(self) -> None:
        self._transport.stop()

    def is_running(self) -> bool:
        return self._transport.is_alive()

    def list_tools(self) -> list[dict]:
        """Tool descriptors discovered at start()."""
        return list(self._tools)

    def ping(self) -> dict:
        return self._request("ping", {})

    def call(self, tool_name: str, arguments: dict[str, Any] | None = None) -> dict:
        """
        Call a tool.

        Returns:
            The envelope dict ({"content": [...], "isError"?: true}).

        Raises:
            ToolCallError: If the server rejects the call at the protocol level.
        """
        if not self.is_running():
            raise RuntimeError("Server is not running. Call start() first.")
        return self._request("tools/call", {"name": tool_name, "arguments": arguments or {}})
