"""
Argument validation against a tool's input schema.

Schemas are checked with jsonschema (draft 2020-12). A single violation is
reported: the shallowest one, with missing required properties ahead of
other problems at the same depth. Properties the schema does not declare
pass through untouched, and a property set to null counts as absent.
"""

from __future__ import annotations

from typing import Any

from jsonschema import Draft202012Validator, ValidationError

from penumbra_mcp.catalog import ToolDescriptor
from penumbra_mcp.errors import ProtocolError


def build_validator(descriptor: ToolDescriptor) -> Draft202012Validator:
    """Check the descriptor's schema and compile a validator for it."""
    Draft202012Validator.check_schema(descriptor.input_schema)
    return Draft202012Validator(descriptor.input_schema)


def _without_nulls(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _without_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_without_nulls(v) for v in value]
    return value


def _format_path(parts) -> str:
    path = ""
    for part in parts:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _rank(error: ValidationError) -> tuple[int, bool]:
    return len(error.absolute_path), error.validator != "required"


def _describe(error: ValidationError) -> str:
    path = list(error.absolute_path)

    if error.validator == "required":
        missing = next(name for name in error.validator_value if name not in error.instance)
        return f"'{_format_path(path + [missing])}' is required"

    field_name = _format_path(path)
    if error.validator == "type":
        expected = error.validator_value
        if isinstance(expected, list):
            expected = " or ".join(expected)
        return f"'{field_name}' must be of type {expected}"
    if error.validator == "enum":
        return f"'{field_name}' must be one of {list(error.validator_value)}, got {error.instance!r}"
    if error.validator == "minItems":
        return f"'{field_name}' must contain at least {error.validator_value} item(s)"
    if field_name:
        return f"'{field_name}': {error.message}"
    return error.message


def validate_arguments(
    descriptor: ToolDescriptor,
    arguments: Any,
    validator: Draft202012Validator | None = None,
) -> dict[str, Any]:
    """
    Check arguments against the descriptor's input schema.

    Args:
        descriptor: The tool being called
        arguments: The raw arguments from the request (None means none)
        validator: Compiled validator for the descriptor; built on the spot
            when omitted

    Returns:
        A new dict holding the same arguments.

    Raises:
        ProtocolError: INVALID_PARAMS naming the offending field.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise ProtocolError.invalid_params(
            f"Invalid arguments for {descriptor.name}: arguments must be an object"
        )

    if validator is None:
        validator = build_validator(descriptor)
    errors = list(validator.iter_errors(_without_nulls(arguments)))
    if errors:
        error = min(errors, key=_rank)
        raise ProtocolError.invalid_params(f"Invalid arguments for {descriptor.name}: {_describe(error)}")
    return dict(arguments)
