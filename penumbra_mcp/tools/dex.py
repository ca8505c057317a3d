"""DEX state query."""

from __future__ import annotations

from typing import Any

from penumbra_mcp.result import Ok, Result
from penumbra_mcp.tools.base import ToolHandler, iso_timestamp


class GetDexStateTool(ToolHandler):
    name = "get_dex_state"
    failure_context = "fetching DEX state"

    async def handle(self, params: dict[str, Any]) -> Result:
        dex = self.settings.dex
        return Ok({
            "currentBatchNumber": "12345",
            "lastBatchTimestamp": iso_timestamp(),
            "batchInterval": dex.batch_interval_ms,
            "minLiquidityAmount": dex.min_liquidity_amount,
            "maxPriceImpact": dex.max_price_impact,
            "activePairs": [
                {
                    "baseAsset": "penumbra/usdc",
                    "quoteAsset": "penumbra/eth",
                    "lastPrice": "1850.50",
                    "volume24h": "1000000",
                }
            ],
        })
