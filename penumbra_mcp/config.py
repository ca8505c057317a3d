"""
Process settings, resolved once from the environment at startup.

    settings = Settings.from_env()

The resulting value is immutable and passed explicitly to the handler set
and the node client. Nothing reads os.environ after this point.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from penumbra_mcp.errors import ConfigError

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def _env_str(environ: Mapping[str, str], name: str, default: str) -> str:
    value = environ.get(name)
    if value is None:
        return default
    return value.strip() or default


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    value = environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring {name}={value!r}: not an integer, using {default}")
        return default


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    value = environ.get(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring {name}={value!r}: not a number, using {default}")
        return default


def _env_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    value = environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def _require_positive(name: str, value: float) -> None:
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class NodeSettings:
    """Where the ledger node lives and how hard to try reaching it."""

    url: str = "http://localhost:8080"
    timeout_ms: int = 10000
    retries: int = 3
    live: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "NodeSettings":
        settings = cls(
            url=_env_str(environ, "PENUMBRA_NODE_URL", cls.url),
            timeout_ms=_env_int(environ, "PENUMBRA_REQUEST_TIMEOUT", cls.timeout_ms),
            retries=_env_int(environ, "PENUMBRA_REQUEST_RETRIES", cls.retries),
            live=_env_bool(environ, "PENUMBRA_NODE_LIVE", cls.live),
        )
        _require_positive("PENUMBRA_REQUEST_TIMEOUT", settings.timeout_ms)
        if settings.retries < 0:
            raise ConfigError(f"PENUMBRA_REQUEST_RETRIES must be >= 0, got {settings.retries}")
        return settings

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


@dataclass(frozen=True)
class ChainSettings:
    network: str = "testnet"
    chain_id: str = "penumbra-testnet"
    block_time_ms: int = 6000
    epoch_duration: int = 100  # blocks

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "ChainSettings":
        settings = cls(
            network=_env_str(environ, "PENUMBRA_NETWORK", cls.network),
            chain_id=_env_str(environ, "PENUMBRA_CHAIN_ID", cls.chain_id),
            block_time_ms=_env_int(environ, "PENUMBRA_BLOCK_TIME", cls.block_time_ms),
            epoch_duration=_env_int(environ, "PENUMBRA_EPOCH_DURATION", cls.epoch_duration),
        )
        _require_positive("PENUMBRA_BLOCK_TIME", settings.block_time_ms)
        _require_positive("PENUMBRA_EPOCH_DURATION", settings.epoch_duration)
        return settings


@dataclass(frozen=True)
class DexSettings:
    batch_interval_ms: int = 60000
    min_liquidity_amount: str = "1000"
    max_price_impact: float = 0.05

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "DexSettings":
        settings = cls(
            batch_interval_ms=_env_int(environ, "PENUMBRA_DEX_BATCH_INTERVAL", cls.batch_interval_ms),
            min_liquidity_amount=_env_str(environ, "PENUMBRA_DEX_MIN_LIQUIDITY", cls.min_liquidity_amount),
            max_price_impact=_env_float(environ, "PENUMBRA_DEX_MAX_PRICE_IMPACT", cls.max_price_impact),
        )
        _require_positive("PENUMBRA_DEX_BATCH_INTERVAL", settings.batch_interval_ms)
        if not 0 <= settings.max_price_impact <= 1:
            raise ConfigError(
                f"PENUMBRA_DEX_MAX_PRICE_IMPACT must be within [0, 1], got {settings.max_price_impact}"
            )
        return settings


@dataclass(frozen=True)
class GovernanceSettings:
    voting_period_ms: int = 604800000  # 7 days
    min_deposit_amount: str = "10000"

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "GovernanceSettings":
        settings = cls(
            voting_period_ms=_env_int(
                environ, "PENUMBRA_GOVERNANCE_VOTING_PERIOD", cls.voting_period_ms
            ),
            min_deposit_amount=_env_str(
                environ, "PENUMBRA_GOVERNANCE_MIN_DEPOSIT", cls.min_deposit_amount
            ),
        )
        _require_positive("PENUMBRA_GOVERNANCE_VOTING_PERIOD", settings.voting_period_ms)
        return settings


@dataclass(frozen=True)
class Settings:
    node: NodeSettings = NodeSettings()
    chain: ChainSettings = ChainSettings()
    dex: DexSettings = DexSettings()
    governance: GovernanceSettings = GovernanceSettings()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Raises:
            ConfigError: If a value parses but is out of range.
        """
        environ = os.environ if environ is None else environ
        return cls(
            node=NodeSettings.from_env(environ),
            chain=ChainSettings.from_env(environ),
            dex=DexSettings.from_env(environ),
            governance=GovernanceSettings.from_env(environ),
        )
