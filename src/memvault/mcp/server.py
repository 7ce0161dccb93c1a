"""MCP server exposing the memory tool."""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import ToolAnnotations
from pydantic import Field

from memvault.core.settings import Settings
from memvault.tools.gateway import ToolGateway
from memvault.tools.messages import build_tool_call
from memvault.tools.registry import ToolRegistry, register_local_tools
from memvault.tools.schema import (
    MEMORY_TOOL_ANNOTATIONS,
    MEMORY_TOOL_DESCRIPTION,
    PATH_PATTERN,
    describe,
)

logger = logging.getLogger(__name__)

CommandName = Literal["view", "create", "str_replace", "insert", "delete", "rename"]
VirtualPath = Annotated[str, Field(pattern=PATH_PATTERN)]
LineNumber = Annotated[int, Field(ge=1)]
LineRange = Annotated[list[LineNumber], Field(min_length=2, max_length=2)]

CommandArg = Annotated[CommandName, Field(description=describe("command"))]
PathArg = Annotated[VirtualPath | None, Field(description=describe("path"))]
ViewRangeArg = Annotated[LineRange | None, Field(description=describe("view_range"))]
FileTextArg = Annotated[str | None, Field(description=describe("file_text"))]
OldStrArg = Annotated[str | None, Field(description=describe("old_str"))]
NewStrArg = Annotated[str | None, Field(description=describe("new_str"))]
InsertLineArg = Annotated[LineNumber | None, Field(description=describe("insert_line"))]
InsertTextArg = Annotated[str | None, Field(description=describe("insert_text"))]
OldPathArg = Annotated[VirtualPath | None, Field(description=describe("old_path"))]
NewPathArg = Annotated[VirtualPath | None, Field(description=describe("new_path"))]
OverwriteArg = Annotated[bool, Field(description=describe("overwrite"))]


def build_server(settings: Settings) -> FastMCP:
    server = FastMCP(settings.server_name)
    registry = ToolRegistry()
    register_local_tools(registry, settings)
    gateway = ToolGateway(registry)

    @server.tool(
        name="memory",
        description=MEMORY_TOOL_DESCRIPTION,
        annotations=ToolAnnotations(**MEMORY_TOOL_ANNOTATIONS),
    )
    async def memory(
        command: CommandArg,
        path: PathArg = None,
        view_range: ViewRangeArg = None,
        file_text: FileTextArg = None,
        old_str: OldStrArg = None,
        new_str: NewStrArg = None,
        insert_line: InsertLineArg = None,
        insert_text: InsertTextArg = None,
        old_path: OldPathArg = None,
        new_path: NewPathArg = None,
        overwrite: OverwriteArg = False,
    ) -> str:
        args: dict[str, Any] = {
            name: value
            for name, value in {
                "command": command,
                "path": path,
                "view_range": view_range,
                "file_text": file_text,
                "old_str": old_str,
                "new_str": new_str,
                "insert_line": insert_line,
                "insert_text": insert_text,
                "old_path": old_path,
                "new_path": new_path,
            }.items()
            if value is not None
        }
        if overwrite:
            args["overwrite"] = True
        result = await gateway.execute(build_tool_call("memory", args))
        if not result.ok:
            raise ToolError(f"{result.error_kind}: {result.error}")
        return result.result or ""

    return server


def run_server(settings: Settings) -> None:
    logger.info(
        "serving memory root %s over %s", settings.storage_root, settings.transport
    )
    build_server(settings).run(transport=settings.transport)
