"""Tool call and result messages."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ToolCall:
    call_id: str
    tool: str
    args: dict[str, Any]


@dataclass(frozen=True)
class ToolResult:
    call_id: str
    ok: bool
    result: str | None
    error: str | None
    error_kind: str | None
    elapsed_ms: int


def new_call_id() -> str:
    return f"call_{uuid.uuid4().hex}"


def build_tool_call(tool: str, args: dict[str, Any]) -> ToolCall:
    return ToolCall(call_id=new_call_id(), tool=tool, args=args)
