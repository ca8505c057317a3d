"""Argument validation against tool input schemas."""

from __future__ import annotations

import pytest
from jsonschema.exceptions import SchemaError

from penumbra_mcp.catalog import TOOL_CATALOG, ToolDescriptor
from penumbra_mcp.errors import ErrorCode, ProtocolError
from penumbra_mcp.validation import build_validator, validate_arguments

CATALOG = {d.name: d for d in TOOL_CATALOG}


def _reject(tool: str, arguments) -> str:
    with pytest.raises(ProtocolError) as exc_info:
        validate_arguments(CATALOG[tool], arguments)
    assert exc_info.value.code is ErrorCode.INVALID_PARAMS
    return exc_info.value.message


def test_returns_copy_with_undeclared_keys():
    args = {"hash": "0xabc", "extra": 1}
    validated = validate_arguments(CATALOG["get_transaction"], args)
    assert validated == args
    assert validated is not args


def test_none_is_empty_object():
    assert validate_arguments(CATALOG["get_chain_status"], None) == {}


def test_non_object_arguments_rejected():
    assert "must be an object" in _reject("get_chain_status", ["hash"])


def test_required_null_counts_as_missing():
    assert "'hash' is required" in _reject("get_transaction", {"hash": None})


def test_wrong_type_names_field():
    assert "'transaction' must be of type string" in _reject("simulate_transaction", {"transaction": 123})


def test_booleans_are_not_numbers():
    message = _reject(
        "build_transaction",
        {"actions": [{"type": "spend", "params": {}}], "expiryHeight": True},
    )
    assert "'expiryHeight' must be of type number" in message


def test_optional_null_is_ignored():
    validate_arguments(
        CATALOG["build_transaction"],
        {"actions": [{"type": "spend", "params": {}}], "memo": None},
    )


def test_status_enum_enforced():
    validate_arguments(CATALOG["get_governance_proposals"], {"status": "completed"})
    assert "'status' must be one of" in _reject("get_governance_proposals", {"status": "pending"})


def test_actions_must_not_be_empty():
    assert "at least 1" in _reject("estimate_fees", {"actions": []})


def test_nested_action_fields_reported_with_path():
    message = _reject(
        "build_transaction",
        {"actions": [{"type": "spend", "params": {}}, {"type": "spend"}]},
    )
    assert "'actions[1].params' is required" in message


def test_build_transaction_rejects_unknown_action_type():
    message = _reject("build_transaction", {"actions": [{"type": "mint", "params": {}}]})
    assert "'actions[0].type' must be one of" in message


def test_estimate_fees_accepts_unknown_action_type():
    validate_arguments(CATALOG["estimate_fees"], {"actions": [{"type": "mint", "params": {}}]})


def test_action_items_must_be_objects():
    assert "'actions[0]' must be of type object" in _reject("estimate_fees", {"actions": ["spend"]})


def test_integer_type():
    descriptor = ToolDescriptor(
        name="paged",
        description="",
        input_schema={"type": "object", "properties": {"limit": {"type": "integer"}}, "required": ["limit"]},
    )
    validate_arguments(descriptor, {"limit": 10})
    validate_arguments(descriptor, {"limit": 10.0})
    with pytest.raises(ProtocolError):
        validate_arguments(descriptor, {"limit": 10.5})


def test_missing_required_reported_before_bad_optional():
    message = _reject("build_transaction", {"memo": 5})
    assert "'actions' is required" in message


def test_null_inside_action_counts_as_absent():
    message = _reject("estimate_fees", {"actions": [{"type": "spend", "params": None}]})
    assert "'actions[0].params' is required" in message


def test_precompiled_validator_is_used():
    descriptor = CATALOG["get_transaction"]
    validator = build_validator(descriptor)
    assert validate_arguments(descriptor, {"hash": "0x1"}, validator) == {"hash": "0x1"}


def test_malformed_schema_rejected_at_build():
    descriptor = ToolDescriptor(name="broken", description="", input_schema={"type": "not-a-type"})
    with pytest.raises(SchemaError):
        build_validator(descriptor)
