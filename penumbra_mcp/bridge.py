"""
Bridge between the Penumbra tool server and LangChain.

Wraps each tool the server exposes as a LangChain StructuredTool so an
agent can call it.

Usage:
    from penumbra_mcp.bridge import langchain_tools

    with PenumbraToolClient() as client:
        tools = langchain_tools(client)
"""

from __future__ import annotations

from typing import Any

from langchain_core.tools import StructuredTool

from penumbra_mcp.client import PenumbraToolClient


def envelope_text(envelope: dict) -> str:
    """Join the text blocks of an envelope."""
    return "\n".join(
        block.get("text", "") for block in envelope.get("content", []) if block.get("type") == "text"
    )


def to_langchain_tool(client: PenumbraToolClient, tool_name: str) -> StructuredTool:
    """
    Create a StructuredTool that forwards calls to the server.

    The tool's argument schema is the server's inputSchema. Failures
    (protocol errors included) come back to the agent as text.

    Raises:
        ValueError: If the server does not expose tool_name.
    """
    descriptor = next((t for t in client.list_tools() if t["name"] == tool_name), None)
    if descriptor is None:
        raise ValueError(f"Server does not expose tool '{tool_name}'")

    def _call(**kwargs: Any) -> str:
        try:
            envelope = client.call(tool_name, kwargs)
        except Exception as e:
            return f"Error calling {tool_name}: {e}"
        return envelope_text(envelope)

    return StructuredTool.from_function(
        func=_call,
        name=tool_name,
        description=descriptor.get("description", tool_name),
        args_schema=descriptor.get("inputSchema", {"type": "object", "properties": {}}),
    )


def langchain_tools(client: PenumbraToolClient) -> list[StructuredTool]:
    """Wrap every tool the server exposes, in catalog order."""
    return [to_langchain_tool(client, t["name"]) for t in client.list_tools()]
