"""
Transaction tools: building, fee estimation and simulation.

Fees are computed as

    total = BASE_FEE + sum(ACTION_FEES[kind] for each action)

with every amount reported as a string with 6 decimal places.
"""

from __future__ import annotations

import secrets
from decimal import Decimal
from enum import Enum
from typing import Any

from penumbra_mcp.result import Ok, Result
from penumbra_mcp.tools.base import ToolHandler, iso_timestamp


class ActionKind(Enum):
    SPEND = "spend"
    OUTPUT = "output"
    SWAP = "swap"
    DELEGATE = "delegate"
    UNDELEGATE = "undelegate"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, tag: Any) -> "ActionKind":
        """Map an action's type tag to a kind; unrecognized tags are UNKNOWN."""
        try:
            kind = cls(tag)
        except ValueError:
            return cls.UNKNOWN
        return kind


BASE_FEE = Decimal("0.001")

ACTION_FEES: dict[ActionKind, Decimal] = {
    ActionKind.SPEND: Decimal("0.0005"),
    ActionKind.OUTPUT: Decimal("0.0003"),
    ActionKind.SWAP: Decimal("0.001"),
    ActionKind.DELEGATE: Decimal("0.0008"),
    ActionKind.UNDELEGATE: Decimal("0.0008"),
    ActionKind.UNKNOWN: Decimal("0"),
}


def format_fee(amount: Decimal) -> str:
    return f"{amount:.6f}"


def action_fee(tag: Any) -> Decimal:
    return ACTION_FEES[ActionKind.parse(tag)]


class BuildTransactionTool(ToolHandler):
    name = "build_transaction"
    failure_context = "building transaction"

    async def handle(self, params: dict[str, Any]) -> Result:
        return Ok({
            "hash": "0x" + secrets.token_hex(16),
            "actions": params["actions"],
            "memo": params.get("memo") or "",
            "expiryHeight": params.get("expiryHeight") or 0,
            "signature": "0x...",
            "timestamp": iso_timestamp(),
        })


class EstimateFeesTool(ToolHandler):
    name = "estimate_fees"
    failure_context = "estimating fees"

    async def handle(self, params: dict[str, Any]) -> Result:
        actions = params["actions"]
        fees = [(action["type"], action_fee(action["type"])) for action in actions]
        total = BASE_FEE + sum((fee for _, fee in fees), Decimal("0"))
        return Ok({
            "estimatedFee": format_fee(total),
            "breakdown": {
                "baseFee": format_fee(BASE_FEE),
                "actionFees": [{"type": tag, "fee": format_fee(fee)} for tag, fee in fees],
            },
        })


class SimulateTransactionTool(ToolHandler):
    name = "simulate_transaction"
    failure_context = "simulating transaction"

    async def handle(self, params: dict[str, Any]) -> Result:
        return Ok({
            "success": True,
            "gasUsed": "75000",
            "logs": [
                {
                    "type": "transaction_executed",
                    "timestamp": iso_timestamp(),
                    "details": "Transaction simulation completed successfully",
                }
            ],
            "effects": {
                "stateChanges": [],
                "events": [],
            },
        })
