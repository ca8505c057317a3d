"""
Dispatcher: resolves a tool call to its handler and produces an envelope.

    dispatcher = Dispatcher(build_handlers(settings))
    envelope = await dispatcher.dispatch("get_chain_status", {})

dispatch() only raises ProtocolError (METHOD_NOT_FOUND or INVALID_PARAMS),
and always before or instead of running the handler's work. Every other
outcome, including a handler blowing up, comes back as an Envelope.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from jsonschema import Draft202012Validator

from penumbra_mcp.catalog import TOOL_CATALOG, ToolDescriptor
from penumbra_mcp.envelope import Envelope, error_envelope, success_envelope
from penumbra_mcp.errors import FailureKind, ProtocolError, ToolFailure
from penumbra_mcp.result import Err, Ok, Result
from penumbra_mcp.tools.base import ToolHandler
from penumbra_mcp.validation import build_validator, validate_arguments

logger = logging.getLogger(__name__)


class Dispatcher:
    """Routes (name, arguments) pairs through validation to a handler."""

    def __init__(
        self,
        handlers: Mapping[str, ToolHandler],
        catalog: Sequence[ToolDescriptor] = TOOL_CATALOG,
    ):
        self._catalog = tuple(catalog)
        self._index: dict[str, tuple[ToolDescriptor, Draft202012Validator, ToolHandler]] = {}

        for descriptor in self._catalog:
            handler = handlers.get(descriptor.name)
            if handler is None:
                raise ValueError(f"No handler registered for tool '{descriptor.name}'")
            self._index[descriptor.name] = (descriptor, build_validator(descriptor), handler)

        unknown = sorted(set(handlers) - set(self._index))
        if unknown:
            raise ValueError(f"Handlers without a catalog entry: {unknown}")

        logger.info(f"Dispatcher ready with {len(self._index)} tools: {list(self._index)}")

    def list_tools(self) -> tuple[ToolDescriptor, ...]:
        return self._catalog

    async def dispatch(self, name: str, arguments: Any = None) -> Envelope:
        """
        Validate and run one tool call.

        Args:
            name: Tool name (exact, case-sensitive)
            arguments: JSON arguments object, or None

        Returns:
            A success envelope, or an isError envelope if the handler failed.

        Raises:
            ProtocolError: METHOD_NOT_FOUND for unknown tools, INVALID_PARAMS
                for arguments that break the tool's input contract.
        """
        entry = self._index.get(name)
        if entry is None:
            raise ProtocolError.method_not_found(f"Unknown tool: {name}")
        descriptor, validator, handler = entry

        params = validate_arguments(descriptor, arguments, validator)
        logger.debug(f"Dispatching {name} with {sorted(params)}")

        result = await self._invoke(handler, params)

        if isinstance(result, Ok):
            return success_envelope(result.value)

        if isinstance(result, Err):
            failure = result.failure
            if failure.kind is FailureKind.INVALID_PARAMS:
                raise ProtocolError.invalid_params(failure.message)
            logger.warning(f"Tool {name} failed: {failure.message}")
            return error_envelope(handler.failure_context, failure.message)

        logger.error(f"Tool {name} returned {type(result).__name__} instead of a Result")
        return error_envelope(handler.failure_context, None)

    async def _invoke(self, handler: ToolHandler, params: dict[str, Any]) -> Result:
        try:
            return await handler.handle(params)
        except Exception as e:
            logger.exception(f"Unhandled error in tool {handler.name}")
            return Err(ToolFailure.from_exception(e))
