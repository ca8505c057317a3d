"""Governance proposal listing."""

from __future__ import annotations

from typing import Any

from penumbra_mcp.result import Ok, Result
from penumbra_mcp.tools.base import ToolHandler, iso_timestamp

DEFAULT_STATUS = "active"


class GetGovernanceProposalsTool(ToolHandler):
    name = "get_governance_proposals"
    failure_context = "fetching governance proposals"

    async def handle(self, params: dict[str, Any]) -> Result:
        status = params.get("status") or DEFAULT_STATUS
        governance = self.settings.governance
        proposals = [
            {
                "id": "1",
                "title": "Example Proposal",
                "status": "active",
                "votingEndTime": iso_timestamp(governance.voting_period_ms),
                "minDeposit": governance.min_deposit_amount,
                "yesVotes": "750000",
                "noVotes": "250000",
            }
        ]
        if status != "all":
            proposals = [p for p in proposals if p["status"] == status]
        return Ok({"proposals": proposals})
