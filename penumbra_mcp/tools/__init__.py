"""
Handler set: one ToolHandler per catalog entry.

With no node client the handlers answer with deterministic sample data
shaped like the real responses; with a client, the chain queries go to the
node.
"""

from __future__ import annotations

from penumbra_mcp.config import Settings
from penumbra_mcp.node import NodeClient
from penumbra_mcp.tools.base import ToolHandler
from penumbra_mcp.tools.chain import GetChainStatusTool, GetTransactionTool, GetValidatorSetTool
from penumbra_mcp.tools.dex import GetDexStateTool
from penumbra_mcp.tools.governance import GetGovernanceProposalsTool
from penumbra_mcp.tools.transactions import BuildTransactionTool, EstimateFeesTool, SimulateTransactionTool

HANDLER_CLASSES: tuple[type[ToolHandler], ...] = (
    GetValidatorSetTool,
    GetChainStatusTool,
    GetTransactionTool,
    GetDexStateTool,
    GetGovernanceProposalsTool,
    BuildTransactionTool,
    EstimateFeesTool,
    SimulateTransactionTool,
)


def build_handlers(settings: Settings, node: NodeClient | None = None) -> dict[str, ToolHandler]:
    """Instantiate every handler, keyed by tool name."""
    return {cls.name: cls(settings, node) for cls in HANDLER_CLASSES}


__all__ = ["ToolHandler", "HANDLER_CLASSES", "build_handlers"]
