"""
Response envelopes for tools/call.

Every well-formed tool call is answered with an envelope:

    {"content": [{"type": "text", "text": "..."}]}                   success
    {"content": [{"type": "text", "text": "Error ..."}], "isError": true}

Content is never empty.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from penumbra_mcp.errors import FALLBACK_ERROR_MESSAGE

NO_DATA_TEXT = "No data returned"


@dataclass(frozen=True)
class TextContent:
    text: str
    type: str = "text"

    def to_dict(self) -> dict:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class Envelope:
    content: tuple[TextContent, ...]
    is_error: bool = False

    def __post_init__(self):
        if not self.content:
            raise ValueError("Envelope content must contain at least one block")

    @property
    def text(self) -> str:
        """Text of all blocks, joined by newlines."""
        return "\n".join(block.text for block in self.content)

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"content": [block.to_dict() for block in self.content]}
        if self.is_error:
            data["isError"] = True
        return data


def _is_empty(payload: Any) -> bool:
    if payload is None:
        return True
    if isinstance(payload, (str, Mapping, Sequence)):
        return len(payload) == 0
    return False


def success_envelope(payload: Any) -> Envelope:
    """Wrap a handler's payload as a success envelope."""
    if _is_empty(payload):
        return Envelope((TextContent(NO_DATA_TEXT),))

    if isinstance(payload, str):
        return Envelope((TextContent(payload),))

    if isinstance(payload, (list, tuple)) and all(isinstance(b, TextContent) for b in payload):
        return Envelope(tuple(payload))

    return Envelope((TextContent(json.dumps(payload, indent=2)),))


def error_envelope(context: str, message: str | None) -> Envelope:
    """
    Build a failure envelope.

    Args:
        context: What was being attempted, e.g. "fetching validator set"
        message: The failure description; falls back to a generic text
    """
    return Envelope(
        (TextContent(f"Error {context}: {message or FALLBACK_ERROR_MESSAGE}"),),
        is_error=True,
    )
