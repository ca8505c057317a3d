"""Settings resolution from the environment."""

from __future__ import annotations

import dataclasses
import logging

import pytest

from penumbra_mcp.config import Settings
from penumbra_mcp.errors import ConfigError


def test_defaults():
    settings = Settings.from_env({})
    assert settings.node.url == "http://localhost:8080"
    assert settings.node.timeout_ms == 10000
    assert settings.node.timeout_seconds == 10.0
    assert settings.node.retries == 3
    assert settings.node.live is False
    assert settings.chain.network == "testnet"
    assert settings.chain.chain_id == "penumbra-testnet"
    assert settings.chain.block_time_ms == 6000
    assert settings.chain.epoch_duration == 100
    assert settings.dex.batch_interval_ms == 60000
    assert settings.dex.min_liquidity_amount == "1000"
    assert settings.dex.max_price_impact == 0.05
    assert settings.governance.voting_period_ms == 604800000
    assert settings.governance.min_deposit_amount == "10000"


def test_values_from_environment():
    settings = Settings.from_env({
        "PENUMBRA_NODE_URL": "http://node:26657",
        "PENUMBRA_REQUEST_RETRIES": "0",
        "PENUMBRA_NODE_LIVE": "yes",
        "PENUMBRA_CHAIN_ID": "penumbra-1",
        "PENUMBRA_DEX_MAX_PRICE_IMPACT": "0.2",
        "PENUMBRA_GOVERNANCE_MIN_DEPOSIT": "500",
    })
    assert settings.node.url == "http://node:26657"
    assert settings.node.retries == 0
    assert settings.node.live is True
    assert settings.chain.chain_id == "penumbra-1"
    assert settings.dex.max_price_impact == 0.2
    assert settings.governance.min_deposit_amount == "500"


def test_unparseable_numbers_fall_back_to_defaults(caplog):
    with caplog.at_level(logging.WARNING, logger="penumbra_mcp.config"):
        settings = Settings.from_env({"PENUMBRA_REQUEST_TIMEOUT": "soon", "PENUMBRA_DEX_MAX_PRICE_IMPACT": "lots"})
    assert settings.node.timeout_ms == 10000
    assert settings.dex.max_price_impact == 0.05
    warned = caplog.text
    assert "PENUMBRA_REQUEST_TIMEOUT='soon'" in warned
    assert "PENUMBRA_DEX_MAX_PRICE_IMPACT='lots'" in warned


@pytest.mark.parametrize(
    "env",
    [
        {"PENUMBRA_REQUEST_TIMEOUT": "0"},
        {"PENUMBRA_REQUEST_RETRIES": "-1"},
        {"PENUMBRA_DEX_MAX_PRICE_IMPACT": "1.5"},
        {"PENUMBRA_EPOCH_DURATION": "-3"},
        {"PENUMBRA_GOVERNANCE_VOTING_PERIOD": "0"},
    ],
)
def test_out_of_range_values_are_fatal(env):
    with pytest.raises(ConfigError):
        Settings.from_env(env)


def test_settings_are_immutable():
    settings = Settings.from_env({})
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.chain.chain_id = "other"  # type: ignore[misc]


def test_reads_process_environment_by_default(monkeypatch):
    monkeypatch.setenv("PENUMBRA_NETWORK", "mainnet")
    assert Settings.from_env().chain.network == "mainnet"
