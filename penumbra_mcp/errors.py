"""
Error taxonomy for the Penumbra tool server.

Two kinds of failure reach a client:

- ProtocolError: the request itself is malformed (unknown tool, bad
  arguments). Surfaced as a JSON-RPC error object, never as an envelope.
- ToolFailure: the request was fine but the operation could not be
  completed. Returned by handlers inside Err(...) and answered with an
  envelope carrying isError=true.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

FALLBACK_ERROR_MESSAGE = "Unknown error occurred"


class ErrorCode(IntEnum):
    """JSON-RPC 2.0 error codes used on the wire."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """A request-level error reported as a JSON-RPC error response."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    @classmethod
    def invalid_params(cls, message: str) -> "ProtocolError":
        return cls(ErrorCode.INVALID_PARAMS, message)

    @classmethod
    def method_not_found(cls, message: str) -> "ProtocolError":
        return cls(ErrorCode.METHOD_NOT_FOUND, message)

    def to_dict(self) -> dict:
        return {"code": int(self.code), "message": self.message}


class FailureKind(Enum):
    DOMAIN = "domain"
    INVALID_PARAMS = "invalid_params"


@dataclass(frozen=True)
class ToolFailure:
    """Why a handler could not produce a result."""

    message: str
    kind: FailureKind = FailureKind.DOMAIN

    @classmethod
    def domain(cls, message: str) -> "ToolFailure":
        return cls(message, FailureKind.DOMAIN)

    @classmethod
    def invalid_params(cls, message: str) -> "ToolFailure":
        return cls(message, FailureKind.INVALID_PARAMS)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ToolFailure":
        return cls.domain(str(exc) or FALLBACK_ERROR_MESSAGE)


class ConfigError(ValueError):
    """Raised at startup when the environment holds an unusable setting."""


class NodeError(Exception):
    """Raised by the node client when the ledger node cannot answer."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ToolCallError(RuntimeError):
    """Raised client-side when a server answers a tool call with a protocol error."""

    def __init__(self, code: int, message: str):
        super().__init__(f"[{code}] {message}")
        self.code = code
        self.message = message
