"""
Static catalog of the tools this server exposes.

The catalog is built once at import time and never changes. Clients read
it through tools/list; the dispatcher builds its name index from it.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any

ACTION_TYPES = ("spend", "output", "swap", "delegate", "undelegate")
PROPOSAL_STATUSES = ("active", "completed", "all")


@dataclass(frozen=True)
class ToolDescriptor:
    """Name, description and input contract of one tool."""

    name: str
    description: str
    input_schema: dict[str, Any]

    @property
    def properties(self) -> dict[str, dict]:
        return self.input_schema.get("properties", {})

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(self.input_schema.get("required", ()))

    def to_dict(self) -> dict:
        """Return the wire shape used by tools/list."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": copy.deepcopy(self.input_schema),
        }


def _object_schema(properties: dict[str, dict] | None = None, required: list[str] | None = None) -> dict:
    return {
        "type": "object",
        "properties": properties or {},
        "required": required or [],
    }


def _actions_schema(type_property: dict) -> dict:
    return {
        "type": "array",
        "minItems": 1,
        "items": {
            "type": "object",
            "properties": {
                "type": type_property,
                "params": {
                    "type": "object",
                    "description": "Action-specific parameters",
                },
            },
            "required": ["type", "params"],
        },
    }


TOOL_CATALOG: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name="get_validator_set",
        description="Get the current validator set information",
        input_schema=_object_schema(),
    ),
    ToolDescriptor(
        name="get_chain_status",
        description="Get current chain status including block height and chain ID",
        input_schema=_object_schema(),
    ),
    ToolDescriptor(
        name="get_transaction",
        description="Get details of a specific transaction",
        input_schema=_object_schema(
            {"hash": {"type": "string", "description": "Transaction hash"}},
            ["hash"],
        ),
    ),
    ToolDescriptor(
        name="get_dex_state",
        description="Get current DEX state including latest batch auction results",
        input_schema=_object_schema(),
    ),
    ToolDescriptor(
        name="get_governance_proposals",
        description="Get active governance proposals",
        input_schema=_object_schema(
            {
                "status": {
                    "type": "string",
                    "enum": list(PROPOSAL_STATUSES),
                    "description": "Filter proposals by status",
                    "default": "active",
                },
            },
        ),
    ),
    ToolDescriptor(
        name="build_transaction",
        description="Create and sign transactions with various actions",
        input_schema=_object_schema(
            {
                "actions": _actions_schema(
                    {
                        "type": "string",
                        "enum": list(ACTION_TYPES),
                        "description": "Type of action",
                    }
                ),
                "memo": {"type": "string", "description": "Optional transaction memo"},
                "expiryHeight": {
                    "type": "number",
                    "description": "Optional block height at which transaction expires",
                },
            },
            ["actions"],
        ),
    ),
    ToolDescriptor(
        name="estimate_fees",
        description="Estimate transaction fees based on action types",
        input_schema=_object_schema(
            {"actions": _actions_schema({"type": "string", "description": "Type of action"})},
            ["actions"],
        ),
    ),
    ToolDescriptor(
        name="simulate_transaction",
        description="Simulate transaction execution for validation",
        input_schema=_object_schema(
            {"transaction": {"type": "string", "description": "Serialized transaction"}},
            ["transaction"],
        ),
    ),
)


def list_tools() -> tuple[ToolDescriptor, ...]:
    """Return the full catalog in declaration order."""
    return TOOL_CATALOG
