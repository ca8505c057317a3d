"""
Penumbra MCP tool server: ledger queries and transaction tools over stdio.

Architecture:
    ┌──────────────┐     stdio      ┌──────────────────────────────────┐
    │  MCP client  │ ────────────── │ StdioToolServer                  │
    │ (agent, IDE) │   JSON-RPC     │   → Dispatcher (validate, route) │
    └──────────────┘     pipes      │     → ToolHandler → Envelope     │
                                    └──────────────────────────────────┘

The catalog of tools is fixed at startup. Each tools/call is validated
against the tool's input schema, handed to its handler, and answered with
an envelope ({"content": [...], "isError"?: true}). Malformed calls get a
JSON-RPC error instead.

Settings are read once from PENUMBRA_* environment variables into an
immutable Settings value.

PenumbraToolClient launches the server as a subprocess, and the LangChain
bridge turns its tools into StructuredTools for agents.
"""

from penumbra_mcp.catalog import TOOL_CATALOG, ToolDescriptor, list_tools
from penumbra_mcp.client import PenumbraToolClient
from penumbra_mcp.config import Settings
from penumbra_mcp.dispatcher import Dispatcher
from penumbra_mcp.envelope import Envelope, TextContent
from penumbra_mcp.errors import ErrorCode, ProtocolError, ToolCallError, ToolFailure
from penumbra_mcp.server import StdioToolServer
from penumbra_mcp.tools import ToolHandler, build_handlers


# Bridge requires langchain; lazy import to keep the server standalone
def langchain_tools(*args, **kwargs):
    from penumbra_mcp.bridge import langchain_tools as _impl
    return _impl(*args, **kwargs)


__all__ = [
    "TOOL_CATALOG",
    "ToolDescriptor",
    "list_tools",
    "PenumbraToolClient",
    "Settings",
    "Dispatcher",
    "Envelope",
    "TextContent",
    "ErrorCode",
    "ProtocolError",
    "ToolCallError",
    "ToolFailure",
    "StdioToolServer",
    "ToolHandler",
    "build_handlers",
    "langchain_tools",
]
