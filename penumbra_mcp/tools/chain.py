"""Chain queries: validator set, chain status, transaction lookup."""

from __future__ import annotations

from typing import Any

from penumbra_mcp.errors import NodeError, ToolFailure
from penumbra_mcp.result import Err, Ok, Result
from penumbra_mcp.tools.base import ToolHandler, iso_timestamp

PLACEHOLDER_HEIGHT = "1000000"


class GetValidatorSetTool(ToolHandler):
    name = "get_validator_set"
    failure_context = "fetching validator set"

    async def handle(self, params: dict[str, Any]) -> Result:
        if self.node is None:
            return Ok({
                "validators": [
                    {
                        "address": "penumbrav1xyz...",
                        "votingPower": "1000000",
                        "commission": "0.05",
                        "status": "active",
                    }
                ]
            })

        try:
            result = await self.node.validators()
        except NodeError as e:
            return Err(ToolFailure.domain(str(e)))

        # CometBFT does not know about commission; that lives in Penumbra's
        # staking component, which has no RPC route here.
        validators = [
            {
                "address": v.get("address", ""),
                "votingPower": str(v.get("voting_power", "0")),
                "commission": None,
                "status": "active",
            }
            for v in result.get("validators", [])
        ]
        return Ok({"validators": validators})


class GetChainStatusTool(ToolHandler):
    name = "get_chain_status"
    failure_context = "fetching chain status"

    async def handle(self, params: dict[str, Any]) -> Result:
        if self.node is None:
            return Ok({
                "height": PLACEHOLDER_HEIGHT,
                "chainId": self.settings.chain.chain_id,
                "timestamp": iso_timestamp(),
                "blockHash": "0x...",
            })

        try:
            result = await self.node.status()
        except NodeError as e:
            return Err(ToolFailure.domain(str(e)))

        sync_info = result.get("sync_info", {})
        node_info = result.get("node_info", {})
        return Ok({
            "height": str(sync_info.get("latest_block_height", "")),
            "chainId": node_info.get("network") or self.settings.chain.chain_id,
            "timestamp": sync_info.get("latest_block_time") or iso_timestamp(),
            "blockHash": sync_info.get("latest_block_hash", ""),
        })


class GetTransactionTool(ToolHandler):
    name = "get_transaction"
    failure_context = "fetching transaction"

    async def handle(self, params: dict[str, Any]) -> Result:
        tx_hash = params["hash"]
        if not tx_hash.strip():
            return Err(ToolFailure.invalid_params("Transaction hash must be a non-empty string"))

        if self.node is None:
            return Ok({
                "hash": tx_hash,
                "status": "success",
                "height": PLACEHOLDER_HEIGHT,
                "timestamp": iso_timestamp(),
                "gasUsed": "50000",
                "fee": "0.001",
            })

        try:
            result = await self.node.transaction(tx_hash)
        except NodeError as e:
            return Err(ToolFailure.domain(str(e)))

        tx_result = result.get("tx_result", {})
        return Ok({
            "hash": result.get("hash", tx_hash),
            "status": "success" if tx_result.get("code", 0) == 0 else "failed",
            "height": str(result.get("height", "")),
            # /tx carries no block time
            "timestamp": None,
            "gasUsed": str(tx_result.get("gas_used", "0")),
            "fee": None,
        })
