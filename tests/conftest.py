"""Shared fixtures for the tool server tests."""

from __future__ import annotations

import pytest

from penumbra_mcp.config import Settings
from penumbra_mcp.dispatcher import Dispatcher
from penumbra_mcp.tools import ToolHandler, build_handlers
from tool_helpers import CountingHandler


@pytest.fixture()
def settings() -> Settings:
    return Settings.from_env({})


@pytest.fixture()
def handlers(settings: Settings) -> dict[str, CountingHandler]:
    return {name: CountingHandler(h) for name, h in build_handlers(settings).items()}


@pytest.fixture()
def dispatcher(handlers: dict[str, ToolHandler]) -> Dispatcher:
    return Dispatcher(handlers)
