"""Handler payloads without a node attached."""

from __future__ import annotations

import re
from decimal import Decimal

import pytest

from penumbra_mcp.config import DexSettings, GovernanceSettings, Settings
from penumbra_mcp.errors import FailureKind
from penumbra_mcp.result import Err, Ok
from penumbra_mcp.tools import build_handlers
from penumbra_mcp.tools.base import iso_timestamp
from penumbra_mcp.tools.transactions import ACTION_FEES, ActionKind, action_fee, format_fee

ISO_MS = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def test_fee_table_covers_every_kind():
    assert set(ACTION_FEES) == set(ActionKind)
    assert ACTION_FEES[ActionKind.UNKNOWN] == Decimal("0")


@pytest.mark.parametrize(
    "tag, kind",
    [("spend", ActionKind.SPEND), ("undelegate", ActionKind.UNDELEGATE), ("mint", ActionKind.UNKNOWN), (None, ActionKind.UNKNOWN)],
)
def test_action_kind_parse(tag, kind):
    assert ActionKind.parse(tag) is kind


def test_fee_formatting():
    assert format_fee(action_fee("output")) == "0.000300"
    assert format_fee(action_fee("whatever")) == "0.000000"


def test_iso_timestamp_format():
    assert ISO_MS.match(iso_timestamp())
    assert ISO_MS.match(iso_timestamp(604800000))


@pytest.mark.asyncio
async def test_estimate_fees_unknown_type_costs_nothing(settings):
    result = await build_handlers(settings)["estimate_fees"].handle(
        {"actions": [{"type": "delegate", "params": {}}, {"type": "mint", "params": {}}]}
    )
    assert isinstance(result, Ok)
    assert result.value["estimatedFee"] == "0.001800"
    assert result.value["breakdown"]["actionFees"][1] == {"type": "mint", "fee": "0.000000"}


@pytest.mark.asyncio
async def test_build_transaction_keeps_expiry_and_generates_fresh_hash(settings):
    handler = build_handlers(settings)["build_transaction"]
    params = {"actions": [{"type": "swap", "params": {}}], "expiryHeight": 5000}
    first = (await handler.handle(params)).value
    second = (await handler.handle(params)).value
    assert first["expiryHeight"] == 5000
    assert first["memo"] == ""
    assert first["hash"] != second["hash"]
    assert ISO_MS.match(first["timestamp"])


@pytest.mark.asyncio
async def test_simulation_report_shape(settings):
    result = (await build_handlers(settings)["simulate_transaction"].handle({"transaction": "0xdead"})).value
    assert result["success"] is True
    assert result["gasUsed"] == "75000"
    assert result["effects"] == {"stateChanges": [], "events": []}
    assert result["logs"][0]["type"] == "transaction_executed"


@pytest.mark.asyncio
async def test_dex_state_reflects_settings():
    settings = Settings(dex=DexSettings(batch_interval_ms=30000, min_liquidity_amount="5", max_price_impact=0.1))
    result = (await build_handlers(settings)["get_dex_state"].handle({})).value
    assert result["batchInterval"] == 30000
    assert result["minLiquidityAmount"] == "5"
    assert result["maxPriceImpact"] == 0.1
    assert result["activePairs"][0]["baseAsset"] == "penumbra/usdc"


@pytest.mark.asyncio
async def test_governance_defaults_to_active():
    settings = Settings(governance=GovernanceSettings(min_deposit_amount="42"))
    handler = build_handlers(settings)["get_governance_proposals"]

    active = (await handler.handle({})).value["proposals"]
    assert len(active) == 1
    assert active[0]["minDeposit"] == "42"
    assert ISO_MS.match(active[0]["votingEndTime"])

    everything = (await handler.handle({"status": "all"})).value["proposals"]
    assert [p["id"] for p in everything] == ["1"]
    assert (await handler.handle({"status": "completed"})).value["proposals"] == []


@pytest.mark.asyncio
async def test_transaction_placeholder(settings):
    handler = build_handlers(settings)["get_transaction"]
    result = (await handler.handle({"hash": "0xabc"})).value
    assert result["hash"] == "0xabc"
    assert result["fee"] == "0.001"

    blank = await handler.handle({"hash": "   "})
    assert isinstance(blank, Err)
    assert blank.failure.kind is FailureKind.INVALID_PARAMS
