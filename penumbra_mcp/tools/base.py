"""
Base class for tool handlers.

A handler implements one catalog entry:

    class MyTool(ToolHandler):
        name = "my_tool"
        failure_context = "doing my thing"

        async def handle(self, params: dict) -> Result:
            return Ok({"result": params["input"]})

Handlers never raise for expected failures; they return Err(ToolFailure).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any

from penumbra_mcp.config import Settings
from penumbra_mcp.node import NodeClient
from penumbra_mcp.result import Result


def iso_timestamp(offset_ms: int = 0) -> str:
    """UTC timestamp in ISO-8601 with milliseconds and a Z suffix."""
    moment = datetime.now(timezone.utc) + timedelta(milliseconds=offset_ms)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ToolHandler(ABC):
    """
    Implementation of a single tool.

    Subclasses set name (matching a catalog entry) and failure_context
    (used in the "Error <context>: <message>" text of failure envelopes).
    """

    # Subclasses must set these
    name: str = ""
    failure_context: str = "running tool"

    def __init__(self, settings: Settings, node: NodeClient | None = None):
        self.settings = settings
        self.node = node

    @abstractmethod
    async def handle(self, params: dict[str, Any]) -> Result:
        """
        Execute the tool with already validated parameters.

        Args:
            params: Dict of parameter name → value

        Returns:
            Ok(payload) with a JSON-serializable payload, or Err(ToolFailure)
        """
        ...
