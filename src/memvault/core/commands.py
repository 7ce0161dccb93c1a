"""Memory tool command model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from memvault.core.errors import MissingArgumentError, ValidationError


class Command(str, Enum):
    VIEW = "view"
    CREATE = "create"
    STR_REPLACE = "str_replace"
    INSERT = "insert"
    DELETE = "delete"
    RENAME = "rename"


@dataclass(frozen=True)
class MemoryArgs:
    command: Command
    path: str | None = None
    view_range: tuple[int, int] | None = None
    file_text: str | None = None
    old_str: str | None = None
    new_str: str | None = None
    insert_line: int | None = None
    insert_text: str | None = None
    old_path: str | None = None
    new_path: str | None = None
    overwrite: bool = False


def parse_command(value: str | Command) -> Command:
    if isinstance(value, Command):
        return value
    normalized = value.strip().lower()
    try:
        return Command(normalized)
    except ValueError as exc:
        raise ValidationError(f"Unsupported command: {value}") from exc


def parse_args(raw: dict[str, Any]) -> MemoryArgs:
    command = raw.get("command")
    if command is None:
        raise MissingArgumentError("command is required")
    view_range = raw.get("view_range")
    if view_range is not None:
        if len(view_range) != 2:
            raise ValidationError("view_range must be [start, end]")
        view_range = (int(view_range[0]), int(view_range[1]))
    return MemoryArgs(
        command=parse_command(command),
        path=raw.get("path"),
        view_range=view_range,
        file_text=raw.get("file_text"),
        old_str=raw.get("old_str"),
        new_str=raw.get("new_str"),
        insert_line=raw.get("insert_line"),
        insert_text=raw.get("insert_text"),
        old_path=raw.get("old_path"),
        new_path=raw.get("new_path"),
        overwrite=bool(raw.get("overwrite", False)),
    )
