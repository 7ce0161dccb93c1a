"""Tool execution with schema validation."""

from __future__ import annotations

import logging
import time

import jsonschema

from memvault.core.errors import Err, ErrorKind, Ok
from memvault.tools.messages import ToolCall, ToolResult
from memvault.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class ToolGateway:
    def __init__(self, registry: ToolRegistry) -> None:
        self._registry = registry

    async def execute(self, call: ToolCall) -> ToolResult:
        spec = self._registry.get(call.tool)
        try:
            jsonschema.validate(instance=call.args, schema=spec.args_schema)
        except jsonschema.ValidationError as exc:
            logger.warning("tool %s rejected arguments: %s", spec.name, exc.message)
            return ToolResult(
                call_id=call.call_id,
                ok=False,
                result=None,
                error=_describe_schema_error(exc),
                error_kind=ErrorKind.VALIDATION.value,
                elapsed_ms=0,
            )

        handler = self._registry.handler(spec.name)
        start = time.perf_counter()
        outcome = await handler(**call.args)
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            "tool %s (%s) finished ok=%s in %dms",
            spec.name,
            call.args.get("command"),
            outcome.ok,
            elapsed_ms,
        )

        if isinstance(outcome, Ok):
            return ToolResult(
                call_id=call.call_id,
                ok=True,
                result=outcome.message,
                error=None,
                error_kind=None,
                elapsed_ms=elapsed_ms,
            )
        assert isinstance(outcome, Err)
        return ToolResult(
            call_id=call.call_id,
            ok=False,
            result=None,
            error=outcome.message,
            error_kind=outcome.kind.value,
            elapsed_ms=elapsed_ms,
        )


def _describe_schema_error(exc: jsonschema.ValidationError) -> str:
    location = ".".join(str(part) for part in exc.absolute_path)
    if location:
        return f"Invalid argument {location}: {exc.message}"
    return f"Invalid arguments: {exc.message}"
