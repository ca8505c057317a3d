"""Success/failure values returned by tool handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from penumbra_mcp.errors import ToolFailure

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    failure: ToolFailure

    def is_ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return self.failure.message


Result = Union[Ok[Any], Err]
