"""Tool registry and specifications."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from memvault.core.commands import parse_args
from memvault.core.errors import Err, MemoryToolError, Outcome
from memvault.core.settings import Settings
from memvault.tools.local.memory import MemoryStore
from memvault.tools.schema import (
    MEMORY_ARGS_SCHEMA,
    MEMORY_TOOL_ANNOTATIONS,
    MEMORY_TOOL_DESCRIPTION,
)

ToolHandler = Callable[..., Awaitable[Outcome]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    args_schema: dict[str, Any]
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def destructive(self) -> bool:
        return bool(self.annotations.get("destructiveHint", False))


class ToolRegistry:
    def __init__(self) -> None:
        self._specs: dict[str, ToolSpec] = {}
        self._handlers: dict[str, ToolHandler] = {}

    def register(self, spec: ToolSpec, handler: ToolHandler) -> None:
        if spec.name in self._specs:
            raise ValueError(f"Tool already registered: {spec.name}")
        self._specs[spec.name] = spec
        self._handlers[spec.name] = handler

    def get(self, name: str) -> ToolSpec:
        if name not in self._specs:
            raise KeyError(f"Tool not registered: {name}")
        return self._specs[name]

    def handler(self, name: str) -> ToolHandler:
        if name not in self._handlers:
            raise KeyError(f"Handler not registered: {name}")
        return self._handlers[name]

    def list_specs(self) -> list[ToolSpec]:
        return list(self._specs.values())


def memory_handler(store: MemoryStore) -> ToolHandler:
    async def memory(**kwargs: Any) -> Outcome:
        try:
            args = parse_args(kwargs)
        except MemoryToolError as exc:
            return Err(exc.kind, exc.message)
        return await asyncio.to_thread(store.execute, args)

    return memory


def register_local_tools(registry: ToolRegistry, settings: Settings) -> None:
    store = MemoryStore(settings.storage_root)
    registry.register(
        ToolSpec(
            name="memory",
            description=MEMORY_TOOL_DESCRIPTION,
            args_schema=MEMORY_ARGS_SCHEMA,
            annotations=MEMORY_TOOL_ANNOTATIONS,
        ),
        memory_handler(store),
    )
